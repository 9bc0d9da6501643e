"""SIM implementation - synthetic actor program streaming trace batches."""

import asyncio
import random
from typing import Any, Protocol

import httpx

from sysview.logging_config import get_logger

logger = get_logger(__name__)

# Entity type ids and op markers of the simulated runtime
ACTOR = 1
CHANNEL = 2
TRANSACTION = 3
ACTOR_MSG = 10
CHANNEL_SEND = 11
CHANNEL_RCV = 12

DEMO_CAPABILITIES: dict[str, Any] = {
    "activities": [{"id": ACTOR, "label": "Actor"}],
    "passiveEntities": [{"id": CHANNEL, "label": "Channel"}],
    "dynamicScopes": [{"id": TRANSACTION, "label": "Transaction"}],
    "sendOps": [
        {"marker": ACTOR_MSG, "entity": 0, "target": ACTOR, "label": "ActorMessage"},
        {"marker": CHANNEL_SEND, "entity": 0, "target": CHANNEL, "label": "ChannelSend"},
    ],
    "receiveOps": [{"marker": CHANNEL_RCV, "source": CHANNEL}],
}

CHANNEL_ORIGIN = {
    "uri": "file:///demo/pipeline.ns",
    "start_line": 12,
    "start_column": 5,
    "char_length": 18,
}


class ISim(Protocol):
    """Generate trace data for a running system view."""

    async def start(self) -> None:
        """Start scenario."""
        ...

    async def stop(self) -> None:
        """Stop scenario."""
        ...

    def is_running(self) -> bool:
        """Whether a scenario is streaming."""
        ...


class Sim:
    """Streams a growing worker pool with channel traffic."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        rounds: int = 10,
        interval: float = 1.0,
        seed: int | None = None,
    ):
        self._api_url = api_url
        self._rounds = rounds
        self._interval = interval
        self._random = random.Random(seed)
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None

        self._next_id = 0
        self._main_id: int | None = None
        self._workers: list[int] = []
        self._channels: list[int] = []

    async def start(self) -> None:
        """Start scenario; each run announces a fresh program."""
        if self.is_running():
            return

        if self._client:
            await self._client.aclose()

        self._running = True
        self._client = httpx.AsyncClient()
        self.new_program()

        # Start background task
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

        if self._client:
            await self._client.aclose()
            self._client = None

    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def new_program(self) -> None:
        """Forget the simulated program, so the next batch re-announces Main.

        Ids keep counting up, so a restarted run never reuses an id the view
        may still hold.
        """
        self._main_id = None
        self._workers = []
        self._channels = []

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def next_batch(self) -> dict[str, Any]:
        """Build the next trace batch: one new worker and channel plus traffic."""
        batch: dict[str, Any] = {
            "activities": [],
            "passive_entities": [],
            "send_ops": [],
            "receive_ops": [],
        }

        if self._main_id is None:
            self._main_id = self._new_id()
            batch["activities"].append(
                {"id": self._main_id, "name": "Main", "type": ACTOR, "creation_activity_id": None}
            )

        worker_id = self._new_id()
        self._workers.append(worker_id)
        batch["activities"].append(
            {"id": worker_id, "name": "Worker", "type": ACTOR, "creation_activity_id": self._main_id}
        )

        channel_id = self._new_id()
        self._channels.append(channel_id)
        batch["passive_entities"].append(
            {
                "id": channel_id,
                "type": CHANNEL,
                "origin": CHANNEL_ORIGIN,
                "creation_activity_id": self._main_id,
            }
        )

        target = self._random.choice(self._workers)
        batch["send_ops"].append(
            {"type": ACTOR_MSG, "creation_activity_id": self._main_id, "target_id": target}
        )
        batch["send_ops"].append(
            {"type": CHANNEL_SEND, "creation_activity_id": target, "target_id": channel_id}
        )
        batch["receive_ops"].append(
            {"type": CHANNEL_RCV, "creation_activity_id": self._main_id, "source_id": channel_id}
        )
        return batch

    async def _run_scenario(self) -> None:
        """Install the demo meta-model, then stream batches."""
        try:
            await self._post("/api/meta-model", DEMO_CAPABILITIES)

            for _ in range(self._rounds):
                if not self._running:
                    break

                await self._post("/api/trace-data", self.next_batch())
                await asyncio.sleep(self._interval)

            logger.info(
                "SIM: scenario complete: %d workers, %d channels",
                len(self._workers),
                len(self._channels),
            )

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e)

    async def _post(self, path: str, payload: dict[str, Any]) -> None:
        """Send a payload via HTTP API."""
        if not self._client:
            return

        try:
            response = await self._client.post(
                f"{self._api_url}{path}",
                json=payload,
                timeout=10.0,
            )

            if response.status_code == 200:
                logger.info("SIM: %s -> %s", path, response.json().get("status"))
            else:
                logger.error(
                    "SIM: Error posting to %s: %s",
                    path,
                    response.status_code,
                )

        except httpx.HTTPError as e:
            logger.error("SIM: Failed to post to %s: %s", path, e)
