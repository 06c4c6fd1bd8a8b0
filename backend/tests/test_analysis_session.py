import asyncio

import pytest

from models.file_content import SourceFile
from models.responses import ErrorKind
from services.analysis_orchestrator import FallbackPolicy
from services.analysis_session import NO_FILE_MESSAGE, AnalysisSession, AnalysisStatus

POLICY = FallbackPolicy(model_ids=("model-a",))


async def _instant_sleep(_seconds):
    await asyncio.sleep(0)


async def _never(_seconds):
    await asyncio.Event().wait()


def _session(transport, sleep=_instant_sleep):
    return AnalysisSession(transport=transport, policy=POLICY, countdown_sleep=sleep)


@pytest.mark.asyncio
async def test_start_without_file(fake_transport):
    transport = fake_transport([])
    session = _session(transport)
    outcome = await session.start()
    assert outcome.error.user_message == NO_FILE_MESSAGE
    assert session.error_visible is True
    assert session.status is AnalysisStatus.IDLE
    assert transport.calls == []


@pytest.mark.asyncio
async def test_successful_run(fake_transport, sample_resume, result_json):
    session = _session(fake_transport([result_json]))
    session.select_file(SourceFile("resume.txt", sample_resume.encode()))
    await session.start()
    assert session.status is AnalysisStatus.SUCCESS
    assert session.result.overall_score == 7.5
    assert session.error is None


@pytest.mark.asyncio
async def test_status_moves_through_stages(fake_transport, sample_resume, result_json):
    seen = []
    transport = fake_transport([result_json])
    session = _session(transport)

    original_generate = transport.generate

    async def generate(model_id, request):
        seen.append(session.status)
        return await original_generate(model_id, request)

    transport.generate = generate
    session.select_file(SourceFile("resume.txt", sample_resume.encode()))
    await session.start()
    assert seen == [AnalysisStatus.ANALYZING]
    assert session.status is AnalysisStatus.SUCCESS


@pytest.mark.asyncio
async def test_rate_limit_arms_countdown_and_auto_dismisses(fake_transport, sample_resume):
    session = _session(fake_transport([Exception("429 quota exceeded. Please retry in 2.2s.")]))
    session.select_file(SourceFile("resume.txt", sample_resume.encode()))
    await session.start()

    assert session.status is AnalysisStatus.ERROR
    assert session.error.kind is ErrorKind.RATE_LIMITED
    assert session.retry_countdown == 3
    assert session.error_visible is True

    await session.countdown.wait()
    assert session.retry_countdown is None
    assert session.error_visible is False


@pytest.mark.asyncio
async def test_rate_limit_without_delay_has_no_countdown(fake_transport, sample_resume):
    session = _session(fake_transport([Exception("429 Too Many Requests")]))
    session.select_file(SourceFile("resume.txt", sample_resume.encode()))
    await session.start()
    assert session.error.kind is ErrorKind.RATE_LIMITED
    assert session.retry_countdown is None
    assert session.error_visible is True


@pytest.mark.asyncio
async def test_dismiss_cancels_countdown(fake_transport, sample_resume):
    session = _session(fake_transport([Exception("quota hit, retry in 30s")]), sleep=_never)
    session.select_file(SourceFile("resume.txt", sample_resume.encode()))
    await session.start()
    assert session.retry_countdown == 30

    session.dismiss_error()
    assert session.retry_countdown is None
    assert session.error_visible is False


@pytest.mark.asyncio
async def test_reselect_after_error_resets(fake_transport):
    session = _session(fake_transport([]))
    session.select_file(SourceFile("short.txt", b"too short"))
    await session.start()
    assert session.status is AnalysisStatus.ERROR

    session.select_file(SourceFile("other.txt", b"x"))
    assert session.status is AnalysisStatus.IDLE
    assert session.error is None
    assert session.result is None
    assert session.error_visible is False


@pytest.mark.asyncio
async def test_new_run_hides_previous_error(fake_transport, sample_resume, result_json):
    session = _session(fake_transport([Exception("boom"), result_json]))
    session.select_file(SourceFile("resume.txt", sample_resume.encode()))
    await session.start()
    assert session.status is AnalysisStatus.ERROR
    assert session.error_visible is True

    await session.start()
    assert session.status is AnalysisStatus.SUCCESS
    assert session.error is None
    assert session.error_visible is False


@pytest.mark.asyncio
async def test_new_run_cancels_pending_countdown(fake_transport, sample_resume, result_json):
    transport = fake_transport([Exception("quota hit, retry in 30s"), result_json])
    session = _session(transport, sleep=_never)
    session.select_file(SourceFile("resume.txt", sample_resume.encode()))
    await session.start()
    assert session.retry_countdown == 30

    await session.start()
    assert session.retry_countdown is None
    assert session.countdown.is_counting is False
    assert session.result.overall_score == 7.5
