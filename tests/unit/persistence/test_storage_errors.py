"""Unit tests for storage error translation."""

import asyncio

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from margin.domain.error import StorageError
from margin.persistence.error import storage_operation


def failing(error: BaseException):
    @storage_operation("comments.test")
    async def operation():
        raise error

    return operation


class TestStorageOperation:
    """Tests for the storage_operation decorator."""

    @pytest.mark.asyncio
    async def test_timeout_is_retryable(self):
        with pytest.raises(StorageError) as exc_info:
            await failing(asyncio.TimeoutError())()

        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_operational_error_is_retryable(self):
        error = OperationalError("SELECT 1", {}, Exception("connection reset"))

        with pytest.raises(StorageError) as exc_info:
            await failing(error)()

        assert exc_info.value.retryable is True
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_integrity_error_is_not_retryable(self):
        error = IntegrityError("INSERT", {}, Exception("duplicate key"))

        with pytest.raises(StorageError) as exc_info:
            await failing(error)()

        assert exc_info.value.retryable is False
        assert "comments.test" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_other_errors_pass_through(self):
        with pytest.raises(KeyError):
            await failing(KeyError("bug"))()

    @pytest.mark.asyncio
    async def test_successful_result_is_returned(self):
        @storage_operation("comments.ok")
        async def operation(value):
            return value * 2

        assert await operation(21) == 42
