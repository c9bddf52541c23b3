"""Arena allocator and TensorRef handles for signals and coefficient matrices.

The Arena owns one contiguous buffer and hands out space with a bump
pointer. A TensorRef is a small immutable handle (offset, shape, dtype,
strides) into that buffer, so components can point at samples or
coefficient rows without copying them.

The transform engine allocates the whole (scales, samples) coefficient
matrix up front and gives every worker the subref of its own row. Rows
never overlap, so workers write without locking.

Example:
    >>> arena = Arena(size_bytes=1 << 20)
    >>> ref = arena.alloc_tensor((8, 256), np.complex128)
    >>> rows = ref.rows()
    >>> arena.view(rows[3])[:] = 1.0  # writes only row 3
    >>> arena.reset()  # views of old refs now raise ValueError
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True)
class TensorRef:
    """Handle pointing to tensor data in an Arena.

    Attributes:
        offset: Byte offset into arena buffer
        shape: Tensor dimensions
        dtype: NumPy data type
        strides: Byte strides for each dimension
        generation: Arena generation counter (for staleness detection)
    """

    offset: int
    shape: tuple[int, ...]
    dtype: np.dtype[Any]
    strides: tuple[int, ...]
    generation: int

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError(f"offset must be non-negative, got {self.offset}")
        if len(self.shape) != len(self.strides):
            raise ValueError(
                f"shape and strides must have same length: "
                f"shape={self.shape}, strides={self.strides}"
            )
        if self.generation < 0:
            raise ValueError(f"generation must be non-negative, got {self.generation}")

    @property
    def ndim(self) -> int:
        """Number of dimensions."""
        return len(self.shape)

    @property
    def size(self) -> int:
        """Total number of elements."""
        return int(np.prod(self.shape))

    @property
    def nbytes(self) -> int:
        """Bytes spanned from the first to the last element."""
        if self.size == 0:
            return 0
        last_offset = sum((s - 1) * st for s, st in zip(self.shape, self.strides))
        return last_offset + self.dtype.itemsize

    def subref(self, index: tuple[slice | int, ...]) -> TensorRef:
        """Create a handle to a sub-block of this tensor.

        Args:
            index: Integers (drop the axis) or unit-step slices, one per
                leading axis; missing trailing axes are kept whole

        Returns:
            New TensorRef pointing to the selected region

        Example:
            >>> batch = arena.alloc_tensor((4, 1024), np.float32)
            >>> second = batch.subref((1,))  # shape (1024,)
        """
        if len(index) > len(self.shape):
            raise IndexError(
                f"Too many indices ({len(index)}) for tensor with {self.ndim} dimensions"
            )

        new_offset = self.offset
        new_shape: list[int] = []
        new_strides: list[int] = []

        padded = list(index) + [slice(None)] * (len(self.shape) - len(index))
        for axis, (s, size, stride) in enumerate(zip(padded, self.shape, self.strides)):
            if isinstance(s, (int, np.integer)) and not isinstance(s, bool):
                i = int(s)
                if i < 0:
                    i += size
                if not 0 <= i < size:
                    raise IndexError(
                        f"Index {s} out of bounds for dimension {axis} with size {size}"
                    )
                new_offset += i * stride
            elif isinstance(s, slice):
                start, stop, step = s.indices(size)
                if step != 1:
                    raise NotImplementedError("Strided slices not supported")
                new_shape.append(max(stop - start, 0))
                new_strides.append(stride)
                new_offset += start * stride
            else:
                raise TypeError(f"Invalid index type: {type(s)}")

        return TensorRef(
            offset=new_offset,
            shape=tuple(new_shape),
            dtype=self.dtype,
            strides=tuple(new_strides),
            generation=self.generation,
        )

    def rows(self) -> list[TensorRef]:
        """Split along the first axis into one disjoint handle per row."""
        if self.ndim < 1:
            raise ValueError("Cannot split a 0-d tensor into rows")
        return [self.subref((i,)) for i in range(self.shape[0])]


class Arena:
    """Contiguous memory allocator with bump allocation.

    Attributes:
        size: Total arena size in bytes
        offset: Current allocation offset (bump pointer)
        generation: Incremented on reset() to invalidate old TensorRefs
    """

    def __init__(self, size_bytes: int):
        """Create arena with specified size.

        Args:
            size_bytes: Total size in bytes
        """
        if size_bytes <= 0:
            raise ValueError(f"size_bytes must be positive, got {size_bytes}")

        self._buffer = bytearray(size_bytes)
        self._size = size_bytes
        self._offset = 0
        self._generation = 0

    @property
    def size(self) -> int:
        """Total arena size in bytes."""
        return self._size

    @property
    def offset(self) -> int:
        """Current allocation offset (bytes used)."""
        return self._offset

    @property
    def generation(self) -> int:
        """Current generation counter."""
        return self._generation

    @property
    def available(self) -> int:
        """Remaining bytes available for allocation."""
        return self._size - self._offset

    @staticmethod
    def bytes_needed(shape: tuple[int, ...], dtype: np.dtype[Any] | type | str) -> int:
        """Upper bound on arena bytes for one tensor, alignment padding included."""
        dt = np.dtype(dtype)
        return int(np.prod(shape)) * dt.itemsize + dt.alignment

    def reset(self) -> None:
        """Reset arena for reuse. Invalidates all existing TensorRefs."""
        self._offset = 0
        self._generation += 1

    def alloc_tensor(
        self,
        shape: tuple[int, ...],
        dtype: np.dtype[Any] | type | str,
    ) -> TensorRef:
        """Allocate a zero-initialised C-contiguous tensor in the arena.

        Args:
            shape: Tensor dimensions
            dtype: NumPy data type

        Returns:
            TensorRef handle to the allocated tensor

        Raises:
            ValueError: If allocation would exceed arena size
        """
        dt = np.dtype(dtype)
        shape = tuple(int(s) for s in shape)
        nbytes = int(np.prod(shape)) * dt.itemsize

        alignment = dt.alignment
        aligned_offset = (self._offset + alignment - 1) // alignment * alignment

        end_offset = aligned_offset + nbytes
        if end_offset > self._size:
            raise ValueError(
                f"Arena out of memory: need {nbytes} bytes at offset {aligned_offset}, "
                f"but arena size is {self._size} (available: {self.available})"
            )

        strides = []
        stride = dt.itemsize
        for dim_size in reversed(shape):
            strides.append(stride)
            stride *= dim_size
        strides.reverse()

        ref = TensorRef(
            offset=aligned_offset,
            shape=shape,
            dtype=dt,
            strides=tuple(strides),
            generation=self._generation,
        )
        self._offset = end_offset
        # Memory may hold data from before the last reset
        self.view(ref)[...] = 0
        return ref

    def view(self, ref: TensorRef) -> np.ndarray:
        """Get a NumPy array view of a TensorRef (no copy).

        Raises:
            ValueError: If TensorRef is stale or out of bounds
        """
        if ref.generation != self._generation:
            raise ValueError(
                f"Stale TensorRef: arena was reset (current generation {self._generation}, "
                f"ref is from generation {ref.generation})"
            )

        end_offset = ref.offset + ref.nbytes
        if end_offset > self._size:
            raise ValueError(
                f"TensorRef out of bounds: offset={ref.offset}, nbytes={ref.nbytes}, "
                f"arena size={self._size}"
            )

        return np.ndarray(
            shape=ref.shape,
            dtype=ref.dtype,
            buffer=self._buffer,
            offset=ref.offset,
            strides=ref.strides,
        )

    def copy_tensor(self, arr: np.ndarray) -> TensorRef:
        """Allocate tensor and copy data from array."""
        ref = self.alloc_tensor(arr.shape, arr.dtype)
        self.view(ref)[...] = arr
        return ref

    def __repr__(self) -> str:
        return (
            f"Arena(size={self._size}, offset={self._offset}, "
            f"generation={self._generation}, available={self.available})"
        )
