"""
AI Auditor Service - vision analysis of floorplans, storage and damage photos.

Every call resolves to a value. Without a provider (no API key) a canned
result is returned after a short delay; with a provider, any transport,
API or parsing failure is logged and replaced by an empty/default result.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TypeVar

from movemax.shared.config.prompts import PromptManager, get_prompt_manager
from movemax.shared.core import events
from movemax.shared.core.configuration import AIConfig
from movemax.shared.core.event_bus import EventBus
from movemax.shared.domain.auditor import mock_responses
from movemax.shared.domain.models import (
    ContainerScanResult,
    DamageAssessment,
    DestinationZone,
    DetectedItem,
    InventoryItem,
    StorageSubUnit,
    StorageUnit,
)
from movemax.shared.infrastructure.llm.base import VisionProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUMMARY_FALLBACK = "Error generating AI summary."
SUMMARY_EMPTY = "Could not generate summary."
DAMAGE_FALLBACK = "Could not analyze image."
SQ_FT_PER_CRATE = 3

DISPOSITIONS = ["Keep", "Resell", "Donate", "Recycle", "Trash", "Digitize"]
SEVERITIES = ["Low", "Medium", "High", "Critical"]

DESTINATION_MAP_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "name": {"type": "STRING", "description": "Room name or number e.g. Room 101"},
            "floor": {"type": "STRING", "description": "Floor number if visible, else '1'"},
            "capacity": {"type": "NUMBER", "description": "Estimated person capacity based on size"},
        },
    },
}

FLOORPLAN_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "name": {"type": "STRING"},
            "type": {"type": "STRING"},
            "location": {"type": "STRING"},
            "estimatedCrates": {"type": "NUMBER"},
        },
    },
}

DRAWER_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "items": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "type": {"type": "STRING"},
                    "count": {"type": "NUMBER"},
                    "suggestedDisposition": {"type": "STRING", "enum": DISPOSITIONS},
                },
            },
        },
        "confidence": {"type": "NUMBER"},
    },
}

STORAGE_IMAGE_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "name": {"type": "STRING"},
            "type": {"type": "STRING"},
            "estimatedCrates": {"type": "NUMBER"},
            "condition": {"type": "STRING", "enum": ["New", "Good", "Fair", "Poor", "Damaged"]},
            "suggestedDisposition": {"type": "STRING", "enum": DISPOSITIONS[:5]},
            "subUnits": {
                "type": "ARRAY",
                "items": {
                    "type": "OBJECT",
                    "properties": {
                        "type": {"type": "STRING", "enum": ["drawer", "shelf", "cabinet_space"]},
                        "label": {"type": "STRING"},
                    },
                },
            },
        },
    },
}

DAMAGE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "description": {"type": "STRING"},
        "severity": {"type": "STRING", "enum": SEVERITIES},
    },
}


def _stamp() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def _parse_json(text: str) -> Any:
    if not text:
        raise ValueError("No response text")
    return json.loads(text)


class AuditorService:
    """Wraps a vision provider with prompts, schemas and safe fallbacks."""

    def __init__(
        self,
        provider: Optional[VisionProvider],
        config: Optional[AIConfig] = None,
        event_bus: Optional[EventBus] = None,
        prompts: Optional[PromptManager] = None,
    ):
        self.provider = provider
        self.config = config or AIConfig()
        self.event_bus = event_bus
        self.prompts = prompts or get_prompt_manager()

    @property
    def is_mocked(self) -> bool:
        return self.provider is None

    # --- Public API ---

    async def generate_move_summary(self, inventory: Sequence[InventoryItem]) -> str:
        async def call(provider: VisionProvider) -> str:
            prompt = self.prompts.render("move_summary", inventory=list(inventory))
            text = await provider.generate(prompt)
            return text or SUMMARY_EMPTY

        return await self._run(
            "move_summary",
            call,
            mock=lambda: mock_responses.move_summary(inventory),
            fallback=lambda: SUMMARY_FALLBACK,
            mock_delay=self.config.summary_mock_delay,
        )

    async def analyze_destination_map(self, image_b64: str, mime_type: str = "image/jpeg") -> List[DestinationZone]:
        async def call(provider: VisionProvider) -> List[DestinationZone]:
            text = await provider.generate(
                self.prompts.render("destination_map"), image_b64, mime_type, DESTINATION_MAP_SCHEMA
            )
            if not text:
                return []
            stamp = _stamp()
            return [
                DestinationZone.model_validate({**item, "id": f"zone-{stamp}-{idx}"})
                for idx, item in enumerate(json.loads(text))
            ]

        return await self._run("destination_map", call, mock_responses.destination_zones, list)

    async def analyze_floorplan(self, image_b64: str, mime_type: str = "image/jpeg") -> List[StorageUnit]:
        async def call(provider: VisionProvider) -> List[StorageUnit]:
            prompt = self.prompts.render("floorplan", sq_ft_per_crate=SQ_FT_PER_CRATE)
            text = await provider.generate(prompt, image_b64, mime_type, FLOORPLAN_SCHEMA)
            if not text:
                return []
            stamp = _stamp()
            return [
                StorageUnit.model_validate({
                    **item,
                    "id": f"ai-fp-{stamp}-{idx}",
                    "detectedFromImage": True,
                    "subUnits": [],
                })
                for idx, item in enumerate(json.loads(text))
            ]

        return await self._run("floorplan", call, mock_responses.floorplan_units, list)

    async def analyze_drawer_contents(self, image_b64: str, mime_type: str = "image/jpeg") -> ContainerScanResult:
        async def call(provider: VisionProvider) -> ContainerScanResult:
            text = await provider.generate(
                self.prompts.render("drawer_contents"), image_b64, mime_type, DRAWER_SCHEMA
            )
            parsed = _parse_json(text)
            return ContainerScanResult(
                id=f"scan-{_stamp()}",
                timestamp=datetime.now(timezone.utc).isoformat(),
                items=[DetectedItem.model_validate(item) for item in parsed.get("items") or []],
                confidence=parsed.get("confidence") or 0.8,
            )

        return await self._run(
            "drawer_contents",
            call,
            mock_responses.drawer_scan,
            fallback=lambda: ContainerScanResult(id="", timestamp="", items=[], confidence=0),
        )

    # Older name kept for callers that scan whole cabinets.
    analyze_cabinet_contents = analyze_drawer_contents

    async def analyze_storage_image(self, image_b64: str, mime_type: str = "image/jpeg") -> List[StorageUnit]:
        async def call(provider: VisionProvider) -> List[StorageUnit]:
            text = await provider.generate(
                self.prompts.render("storage_image"), image_b64, mime_type, STORAGE_IMAGE_SCHEMA
            )
            if not text:
                return []
            stamp = _stamp()
            units = []
            for idx, item in enumerate(json.loads(text)):
                sub_units = [
                    StorageSubUnit.model_validate({**sub, "id": f"sub-{stamp}-{idx}-{s_idx}"})
                    for s_idx, sub in enumerate(item.get("subUnits") or [])
                ]
                units.append(StorageUnit.model_validate({
                    **item,
                    "id": f"ai-asset-{stamp}-{idx}",
                    "detectedFromImage": True,
                    "location": "Detected from Photo",
                    "subUnits": sub_units,
                }))
            return units

        return await self._run("storage_image", call, mock_responses.storage_image_units, list)

    async def analyze_damage(self, image_b64: str, mime_type: str = "image/jpeg") -> DamageAssessment:
        async def call(provider: VisionProvider) -> DamageAssessment:
            text = await provider.generate(self.prompts.render("damage"), image_b64, mime_type, DAMAGE_SCHEMA)
            parsed = _parse_json(text)
            return DamageAssessment(
                description=parsed.get("description") or "Analysis Failed",
                severity=parsed.get("severity") or "Medium",
            )

        return await self._run(
            "damage",
            call,
            mock_responses.damage_assessment,
            fallback=lambda: DamageAssessment(description=DAMAGE_FALLBACK),
        )

    # --- Internals ---

    async def _run(
        self,
        kind: str,
        call: Callable[[VisionProvider], Awaitable[T]],
        mock: Callable[[], T],
        fallback: Callable[[], T],
        mock_delay: Optional[float] = None,
    ) -> T:
        await self._publish(events.TOPIC_AI_ANALYSIS_START, kind, mocked=self.is_mocked)

        if self.provider is None:
            await asyncio.sleep(self.config.mock_delay if mock_delay is None else mock_delay)
            result = mock()
        else:
            try:
                result = await call(self.provider)
            except Exception as e:
                logger.error(f"AuditorService: {kind} analysis failed: {e}")
                result = fallback()

        count = len(result) if isinstance(result, list) else None
        await self._publish(events.TOPIC_AI_ANALYSIS_COMPLETE, kind, mocked=self.is_mocked, result_count=count)
        return result

    async def _publish(self, topic: str, kind: str, mocked: bool, result_count: Optional[int] = None) -> None:
        if self.event_bus is None:
            return
        await self.event_bus.publish(topic, events.create_ai_analysis_event(kind, mocked, result_count))
