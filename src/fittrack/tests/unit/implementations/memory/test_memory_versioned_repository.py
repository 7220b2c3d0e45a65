# ABOUTME: Unit tests for InMemoryVersionedRepository
# ABOUTME: Tests version assignment, compare-and-set semantics, isolation and error handling

import asyncio

import pytest

from fittrack.config import FitTrackSettings
from fittrack.exceptions import StorageError
from fittrack.implementations.memory import InMemoryVersionedRepository


class TestReadWrite:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_key_returns_none(self, repository):
        assert await repository.get_with_version("logs-nobody") is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unconditional_write_then_read(self, repository):
        result = await repository.set_if_version("logs-u1", {"workouts": [1]})
        document = await repository.get_with_version("logs-u1")

        assert result.committed is True
        assert result.version
        assert result.last_modified is not None
        assert document.data == {"workouts": [1]}
        assert document.version == result.version
        assert document.last_modified == result.last_modified

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_every_write_gets_a_new_version(self, repository):
        versions = set()
        for _ in range(10):
            versions.add((await repository.set_if_version("k", {"same": True})).version)

        assert len(versions) == 10

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_stored_data_is_isolated_from_callers(self, repository):
        data = {"workouts": [{"id": "w1"}]}
        await repository.set_if_version("k", data)
        data["workouts"].append({"id": "w2"})

        first = await repository.get_with_version("k")
        first.data["workouts"].clear()
        second = await repository.get_with_version("k")

        assert second.data == {"workouts": [{"id": "w1"}]}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_delete(self, repository):
        await repository.set_if_version("k", {})

        assert await repository.delete("k") is True
        assert await repository.delete("k") is False
        assert await repository.get_with_version("k") is None


class TestCompareAndSet:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_matching_version_commits(self, repository):
        v1 = (await repository.set_if_version("k", {"n": 1})).version

        result = await repository.set_if_version("k", {"n": 2}, v1)

        assert result.committed is True
        assert result.version != v1
        assert (await repository.get_with_version("k")).data == {"n": 2}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_stale_version_leaves_value_untouched(self, repository):
        v1 = (await repository.set_if_version("k", {"n": 1})).version
        v2 = (await repository.set_if_version("k", {"n": 2}, v1)).version

        result = await repository.set_if_version("k", {"n": 3}, v1)
        document = await repository.get_with_version("k")

        assert result.committed is False
        assert result.version is None
        assert document.data == {"n": 2}
        assert document.version == v2

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_expected_version_on_missing_key_fails(self, repository):
        result = await repository.set_if_version("k", {"n": 1}, "some-version")

        assert result.committed is False
        assert await repository.get_with_version("k") is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_only_if_new(self, repository):
        first = await repository.set_if_version("k", {"n": 1}, only_if_new=True)
        second = await repository.set_if_version("k", {"n": 2}, only_if_new=True)

        assert first.committed is True
        assert second.committed is False
        assert (await repository.get_with_version("k")).data == {"n": 1}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unconditional_write_overrides_any_version(self, repository):
        await repository.set_if_version("k", {"n": 1})
        await repository.set_if_version("k", {"n": 2})

        result = await repository.set_if_version("k", {"n": 3})

        assert result.committed is True
        assert (await repository.get_with_version("k")).data == {"n": 3}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_racing_conditional_writes_single_winner(self, repository):
        base = (await repository.set_if_version("k", {"n": 0})).version

        results = await asyncio.gather(*(repository.set_if_version("k", {"n": i}, base) for i in range(1, 21)))

        assert sum(1 for r in results if r.committed) == 1


class TestErrors:
    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ["", None, 5])
    async def test_invalid_key(self, repository, key):
        with pytest.raises(StorageError) as exc_info:
            await repository.get_with_version(key)
        assert exc_info.value.code == "INVALID_KEY"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_invalid_value(self, repository):
        with pytest.raises(StorageError) as exc_info:
            await repository.set_if_version("k", ["not", "a", "dict"])
        assert exc_info.value.code == "INVALID_VALUE"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_max_keys(self):
        repository = InMemoryVersionedRepository(max_keys=2)
        await repository.set_if_version("a", {})
        await repository.set_if_version("b", {})

        with pytest.raises(StorageError) as exc_info:
            await repository.set_if_version("c", {})
        assert exc_info.value.code == "STORAGE_LIMIT_EXCEEDED"

        # Existing keys can still be rewritten at capacity.
        assert (await repository.set_if_version("a", {"n": 1})).committed is True
        assert await repository.count() == 2

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_closed_repository(self):
        repository = InMemoryVersionedRepository()
        await repository.set_if_version("k", {})
        await repository.close()

        for call in (
            lambda: repository.get_with_version("k"),
            lambda: repository.set_if_version("k", {}),
            lambda: repository.delete("k"),
        ):
            with pytest.raises(StorageError) as exc_info:
                await call()
            assert exc_info.value.code == "REPOSITORY_CLOSED"

    @pytest.mark.unit
    def test_from_settings(self):
        repository = InMemoryVersionedRepository.from_settings(FitTrackSettings(STORAGE_MAX_KEYS=3, _env_file=None))

        assert repository.max_keys == 3
