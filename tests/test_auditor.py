from __future__ import annotations

import json
from typing import Any, List, Optional

import pytest

from movemax.shared.core import events
from movemax.shared.core.configuration import AIConfig, UploadConfig
from movemax.shared.core.exceptions import UploadValidationError
from movemax.shared.domain import seed
from movemax.shared.domain.auditor import AuditorService, encode_upload, to_data_url, validate_upload
from movemax.shared.domain.auditor.service import DAMAGE_FALLBACK, SUMMARY_EMPTY, SUMMARY_FALLBACK
from movemax.shared.domain.models import IncidentSeverity
from movemax.shared.infrastructure.llm import LLMError, VisionProvider

NO_DELAY = AIConfig(mock_delay=0, summary_mock_delay=0)


class ScriptedProvider(VisionProvider):
    """Returns a fixed reply (or raises) and records every call."""

    default_model = "scripted"

    def __init__(self, reply: str = "", error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: List[dict[str, Any]] = []

    async def generate(self, prompt, image_b64=None, mime_type="image/jpeg", response_schema=None, model=None):
        self.calls.append({
            "prompt": prompt,
            "image_b64": image_b64,
            "mime_type": mime_type,
            "response_schema": response_schema,
        })
        if self.error is not None:
            raise self.error
        return self.reply


def _inventory():
    return seed.initial_projects()[0].inventory


# --- Mock path ---


@pytest.mark.asyncio
async def test_mock_summary_counts_assets():
    service = AuditorService(None, NO_DELAY)
    assert service.is_mocked
    summary = await service.generate_move_summary(_inventory())
    assert "253 tagged assets" in summary


@pytest.mark.asyncio
async def test_mock_results_publish_lifecycle_events(event_bus, recorder):
    await event_bus.subscribe(events.TOPIC_AI_ANALYSIS_COMPLETE, recorder)
    service = AuditorService(None, NO_DELAY, event_bus)

    zones = await service.analyze_destination_map("aGVsbG8=")
    await event_bus.wait_until_idle()

    assert [z.id for z in zones] == ["z1", "z2", "z3", "z4", "z5"]
    assert recorder.payloads == [{"kind": "destination_map", "mocked": True, "result_count": 5}]


@pytest.mark.asyncio
async def test_mock_image_analyses():
    service = AuditorService(None, NO_DELAY)
    assert [u.name for u in await service.analyze_floorplan("x")] == [
        "Corner Desk Cluster", "Filing Bank (6 Units)",
    ]
    scan = await service.analyze_drawer_contents("x")
    assert scan.confidence == 0.95
    assert [i.count for i in scan.items] == [35, 4, 1]
    assert (await service.analyze_storage_image("x"))[0].type == "Chair"
    assert (await service.analyze_damage("x")).severity == IncidentSeverity.LOW


# --- Provider path ---


@pytest.mark.asyncio
async def test_summary_prompt_lists_inventory():
    provider = ScriptedProvider("Executive summary.")
    service = AuditorService(provider, NO_DELAY)

    assert await service.generate_move_summary(_inventory()) == "Executive summary."
    prompt = provider.calls[0]["prompt"]
    assert "- 4x Exec Desk (Mahogany) (Executive Wing) [FRAGILE/HIGH VALUE]" in prompt
    assert "- 120x Herman Miller Chairs (Open Office)\n" in prompt
    assert provider.calls[0]["image_b64"] is None


@pytest.mark.asyncio
async def test_empty_summary_reply():
    service = AuditorService(ScriptedProvider(""), NO_DELAY)
    assert await service.generate_move_summary(_inventory()) == SUMMARY_EMPTY


@pytest.mark.asyncio
async def test_floorplan_reply_becomes_storage_units():
    reply = json.dumps([{"name": "Desk Row", "type": "Desk", "location": "Room 4", "estimatedCrates": 5}])
    provider = ScriptedProvider(reply)
    service = AuditorService(provider, NO_DELAY)

    units = await service.analyze_floorplan("aW1n", "image/png")
    assert units[0].id.startswith("ai-fp-")
    assert units[0].estimated_crates == 5
    assert units[0].detected_from_image is True
    assert provider.calls[0]["mime_type"] == "image/png"
    assert provider.calls[0]["response_schema"]["type"] == "ARRAY"
    assert "1 crate per 3 sq ft" in provider.calls[0]["prompt"]


@pytest.mark.asyncio
async def test_storage_image_assigns_sub_unit_ids():
    reply = json.dumps([{
        "name": "Lateral File", "type": "Cabinet", "condition": "Fair", "suggestedDisposition": "Recycle",
        "subUnits": [{"type": "drawer", "label": "Top"}, {"type": "drawer", "label": "Bottom"}],
    }])
    units = await AuditorService(ScriptedProvider(reply), NO_DELAY).analyze_storage_image("x")
    unit = units[0]
    assert unit.location == "Detected from Photo"
    assert [s.label for s in unit.sub_units] == ["Top", "Bottom"]
    assert len({s.id for s in unit.sub_units}) == 2


@pytest.mark.asyncio
async def test_drawer_reply_defaults_confidence():
    reply = json.dumps({"items": [{"type": "Folder", "count": 3, "suggestedDisposition": "Digitize"}]})
    scan = await AuditorService(ScriptedProvider(reply), NO_DELAY).analyze_drawer_contents("x")
    assert scan.confidence == 0.8
    assert scan.items[0].type == "Folder"


@pytest.mark.asyncio
async def test_damage_reply():
    reply = json.dumps({"description": "Cracked glass top", "severity": "High"})
    result = await AuditorService(ScriptedProvider(reply), NO_DELAY).analyze_damage("x")
    assert result.description == "Cracked glass top"
    assert result.severity == IncidentSeverity.HIGH


# --- Failures resolve to fallbacks ---


@pytest.mark.asyncio
async def test_provider_errors_become_fallbacks(event_bus, recorder):
    await event_bus.subscribe(events.TOPIC_AI_ANALYSIS_COMPLETE, recorder)
    service = AuditorService(ScriptedProvider(error=LLMError("quota", status_code=429)), NO_DELAY, event_bus)

    assert await service.generate_move_summary(_inventory()) == SUMMARY_FALLBACK
    assert await service.analyze_floorplan("x") == []
    assert await service.analyze_destination_map("x") == []
    assert await service.analyze_storage_image("x") == []
    assert (await service.analyze_drawer_contents("x")).confidence == 0
    assert (await service.analyze_damage("x")).description == DAMAGE_FALLBACK

    await event_bus.wait_until_idle()
    assert len(recorder.payloads) == 6
    assert all(p["mocked"] is False for p in recorder.payloads)


@pytest.mark.asyncio
async def test_malformed_json_becomes_fallback():
    service = AuditorService(ScriptedProvider("not json"), NO_DELAY)
    assert await service.analyze_floorplan("x") == []
    assert (await service.analyze_damage("x")).description == DAMAGE_FALLBACK


# --- Uploads ---


def test_upload_size_limit():
    with pytest.raises(UploadValidationError, match="Image must be under 5MB"):
        validate_upload("image/png", 5 * 1024 * 1024 + 1)


def test_upload_must_be_an_image():
    with pytest.raises(UploadValidationError, match="Please upload an image file"):
        validate_upload("application/pdf", 100)


def test_upload_limit_is_configurable():
    with pytest.raises(UploadValidationError, match="under 1MB"):
        validate_upload("image/jpeg", 2 * 1024 * 1024, UploadConfig(max_image_bytes=1024 * 1024))


def test_encode_upload():
    assert encode_upload(b"abc", "image/png") == "YWJj"
    assert to_data_url("YWJj", "image/png") == "data:image/png;base64,YWJj"
