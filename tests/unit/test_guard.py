"""
Tests for the per-target processing guard.
"""

import pytest

from pagebrief.exceptions import AlreadyProcessingError
from pagebrief.summarization import ProcessingGuard


class TestProcessingGuard:
    """Tests for ProcessingGuard."""

    def test_acquire_and_release(self):
        guard = ProcessingGuard()
        assert guard.try_acquire("tab-1") is True
        assert guard.try_acquire("tab-1") is False
        assert guard.try_acquire("tab-2") is True
        assert len(guard) == 2

        guard.release("tab-1")
        assert not guard.is_processing("tab-1")
        assert guard.try_acquire("tab-1") is True

    def test_release_unknown_target_is_noop(self):
        ProcessingGuard().release("never-acquired")

    @pytest.mark.asyncio
    async def test_hold_rejects_concurrent_request(self):
        guard = ProcessingGuard()
        async with guard.hold("tab-1"):
            assert guard.is_processing("tab-1")
            with pytest.raises(AlreadyProcessingError) as exc_info:
                async with guard.hold("tab-1"):
                    pass
            assert exc_info.value.error_code == "ALREADY_PROCESSING"
        assert not guard.is_processing("tab-1")

    @pytest.mark.asyncio
    async def test_hold_clears_flag_on_failure(self):
        guard = ProcessingGuard()
        with pytest.raises(RuntimeError):
            async with guard.hold("tab-1"):
                raise RuntimeError("pipeline crashed")
        assert not guard.is_processing("tab-1")
