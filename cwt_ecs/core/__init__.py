"""ECS core: arena memory, world registry, systems, pipelines, config."""
