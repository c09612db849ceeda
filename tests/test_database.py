"""
Data store gateway tests: per-query time bound and error translation
"""
import asyncio
import json
import logging

import pytest

from movie_booking.core.config import settings
from movie_booking.core.database import bounded
from movie_booking.core.exceptions import StoreError
from movie_booking.core.logging_config import CustomJsonFormatter, set_trace_id


class TestQueryTimeout:

    @pytest.mark.asyncio
    async def test_bounded_raises_store_error_on_timeout(self):
        with pytest.raises(StoreError) as exc_info:
            await bounded(asyncio.sleep(1), timeout=0.01)

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Database query timed out"

    @pytest.mark.asyncio
    async def test_bounded_returns_result_within_limit(self):
        async def answer():
            return 42

        assert await bounded(answer(), timeout=1) == 42

    @pytest.mark.asyncio
    async def test_timed_out_query_returns_generic_500(self, client, catalog, monkeypatch):
        monkeypatch.setattr(settings, "QUERY_TIMEOUT_SECONDS", 0.0)

        response = await client.get("/movies")

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail == "An error occurred while fetching movies"
        assert "sqlite" not in detail.lower()

        # The connection goes back to the pool in a usable state
        monkeypatch.undo()
        response = await client.get("/movies")

        assert response.status_code == 200
        assert [m["movie_id"] for m in response.json()] == [1, 2]


class TestJsonLogging:

    def test_trace_id_attached_to_record(self):
        formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(name)s %(message)s')
        record = logging.LogRecord("movie_booking", logging.INFO, __file__, 1, "Seat booked", None, None)
        record.booking_id = 7

        set_trace_id("trace-123")
        try:
            payload = json.loads(formatter.format(record))
        finally:
            set_trace_id(None)

        assert payload["trace_id"] == "trace-123"
        assert payload["booking_id"] == 7
        assert payload["service"] == "movie-booking"
        assert payload["level"] == "INFO"
