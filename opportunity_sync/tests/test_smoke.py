"""Smoke tests: scheduler wiring and a full one-shot cycle with mocked externals."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from opportunity_sync import main


def test_scheduler_jobs(app_config):
    scheduler = AsyncIOScheduler()
    service = MagicMock()

    main.schedule_jobs(scheduler, service, app_config)

    jobs = {job.id: job for job in scheduler.get_jobs()}
    assert set(jobs) == {"poll_providers", "sync_sam_gov"}
    assert jobs["poll_providers"].args == (service, ["grants_gov", "nih", "nsf", "candid"])
    assert jobs["sync_sam_gov"].args == (service, "sam_gov", 1)
    assert jobs["sync_sam_gov"].max_instances == 1
    assert "hour='7,9,11,13,15,17,19,21,23'" in str(jobs["sync_sam_gov"].trigger)


def test_scheduler_without_sam(app_config):
    config = app_config.model_copy(update={"enabled_providers": ["nsf"]})
    scheduler = AsyncIOScheduler()

    main.schedule_jobs(scheduler, MagicMock(), config)

    assert [job.id for job in scheduler.get_jobs()] == ["poll_providers"]


@pytest.mark.asyncio
async def test_poll_providers_isolates_failures():
    service = MagicMock()
    service.trigger = AsyncMock(side_effect=[
        RuntimeError("boom"),
        (200, {"success": True, "message": "Successfully imported 2 NSF research awards"}),
    ])

    await main.poll_providers(service, ["nih", "nsf"])

    assert [c.args[0] for c in service.trigger.call_args_list] == ["nih", "nsf"]


@pytest.mark.asyncio
async def test_run_once_uses_requested_providers(app_config):
    service = MagicMock()
    service.trigger = AsyncMock(return_value=(429, {"message": "quota", "nextResetTime": "x"}))

    with patch.object(main, "load_config", return_value=app_config), \
         patch.object(main, "build_service", return_value=service):
        await main.run_once(["sam_gov"])

    service.trigger.assert_awaited_once_with("sam_gov", automated=True, max_searches=None)


def test_cli_once_flag():
    with patch.object(main, "run_once", new=MagicMock(return_value="coro")) as run_once, \
         patch.object(main.asyncio, "run") as run:
        main.main(["--once", "nsf", "nih"])

    run_once.assert_called_once_with(["nsf", "nih"])
    run.assert_called_once_with("coro")
