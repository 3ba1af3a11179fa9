import pytest

from mozu.errors import AllocationError, InvalidArgumentError, MozuError, raises_allocation_error


class TestErrors:

    def test_hierarchy(self):
        assert issubclass(InvalidArgumentError, ValueError)
        assert issubclass(InvalidArgumentError, MozuError)
        assert issubclass(AllocationError, MemoryError)
        assert issubclass(AllocationError, MozuError)

    def test_memory_error_is_converted(self):
        @raises_allocation_error
        def allocate():
            raise MemoryError("out of memory")

        with pytest.raises(AllocationError) as excinfo:
            allocate()
        assert isinstance(excinfo.value.__cause__, MemoryError)
        assert 'allocate' in str(excinfo.value)

    def test_other_errors_pass_through(self):
        @raises_allocation_error
        def bad():
            raise InvalidArgumentError("bad size")

        with pytest.raises(InvalidArgumentError):
            bad()

    def test_return_value_and_metadata(self):
        @raises_allocation_error
        def ok(x):
            """Docstring."""
            return x * 2

        assert ok(21) == 42
        assert ok.__name__ == 'ok'
        assert ok.__doc__ == "Docstring."
