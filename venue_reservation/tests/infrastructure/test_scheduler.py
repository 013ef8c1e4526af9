from unittest.mock import MagicMock

import pytest
from apscheduler.schedulers.background import BackgroundScheduler

from venue_reservation.infrastructure import ExpiryScheduler
from venue_reservation.infrastructure.scheduler import CLEANUP_JOB_ID


@pytest.fixture
def system() -> MagicMock:
    return MagicMock()


@pytest.fixture
def scheduler_logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def expiry_scheduler(system, scheduler_logger):
    scheduler = ExpiryScheduler(system, interval_minutes=5, logger=scheduler_logger)
    yield scheduler
    scheduler.shutdown()


def test_cleanup_job_registered(expiry_scheduler):
    job = expiry_scheduler.scheduler.get_job(CLEANUP_JOB_ID)

    assert job is not None
    assert job.trigger.interval.total_seconds() == 300
    assert not expiry_scheduler.running


def test_cleanup_job_reports_count(expiry_scheduler, system, scheduler_logger):
    system.cleanup_expired_reservations.return_value = 3

    assert expiry_scheduler.cleanup_job() == 3
    scheduler_logger.info.assert_called_once()


def test_cleanup_job_quiet_when_nothing_expired(expiry_scheduler, system, scheduler_logger):
    system.cleanup_expired_reservations.return_value = 0

    assert expiry_scheduler.cleanup_job() == 0
    scheduler_logger.info.assert_not_called()


def test_cleanup_job_survives_errors(expiry_scheduler, system, scheduler_logger):
    system.cleanup_expired_reservations.side_effect = RuntimeError("db down")

    assert expiry_scheduler.cleanup_job() == 0
    scheduler_logger.error.assert_called_once()
    assert scheduler_logger.error.call_args.kwargs["exc_info"] is True


def test_start_and_shutdown(system, scheduler_logger):
    expiry_scheduler = ExpiryScheduler(
        system, logger=scheduler_logger, scheduler=BackgroundScheduler()
    )

    expiry_scheduler.start()
    expiry_scheduler.start()
    assert expiry_scheduler.running

    expiry_scheduler.shutdown()
    assert not expiry_scheduler.running
