"""Shared test configuration, fixtures and fakes."""

import copy
import json

import pytest

SAMPLE_RESUME = """
John Doe
john.doe@email.com | +1-555-0123

Experience

Senior Software Engineer, Google
Jan 2020 - Present
- Built scalable microservices using Python and Go
- Led team of 5 engineers on payment platform

Software Engineer, Meta
Jun 2017 - Dec 2019
- Developed React frontend applications
- Implemented CI/CD pipelines with Jenkins

Education

Bachelor of Science in Computer Science
Stanford University, 2017

Skills

Python, Go, React, JavaScript, Docker, Kubernetes, AWS, PostgreSQL
"""

VALID_RESULT = {
    "overallScore": 7.5,
    "overallJustification": "Solid engineering resume with quantified impact.",
    "sectionAnalysis": [
        {
            "sectionName": "Experience",
            "strengths": ["Clear progression"],
            "weaknesses": ["Few metrics at Meta"],
            "improvementSuggestions": ["Quantify the CI/CD work"],
        }
    ],
    "atsCompatibility": {"score": 8, "issues": []},
    "keywordAnalysis": {"found": ["Python", "Kubernetes"], "missing": ["Terraform"]},
    "jobMatches": [
        {"role": "Backend Engineer", "matchPercentage": 88, "reason": "Microservices"},
        {"role": "Platform Engineer", "matchPercentage": 74, "reason": "Kubernetes"},
    ],
    "contentQuality": {
        "actionVerbsUsage": "Good",
        "quantifiedAchievements": "Moderate",
        "clarity": "High",
        "professionalTone": "High",
    },
    "dos": ["Keep bullets short"],
    "donts": ["Do not list every tool"],
    "specificImprovements": [
        {
            "section": "Experience",
            "problem": "Vague bullet",
            "suggestedRewrite": "Cut deploy time 40% by rebuilding CI/CD in Jenkins",
        }
    ],
    "finalVerdict": {
        "impression": "Strong backend profile",
        "strength": "Strong",
        "priorityImprovements": ["Add metrics"],
    },
}


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: calls the real Gemini API (needs GEMINI_API_KEY)"
    )


class FakeTransport:
    """Plays back one scripted outcome per call: a response text or an exception."""

    def __init__(self, outcomes):
        self._outcomes = list(outcomes)
        self.calls = []

    async def generate(self, model_id, request):
        self.calls.append((model_id, request))
        outcome = self._outcomes[len(self.calls) - 1]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def models_called(self):
        return [model_id for model_id, _ in self.calls]


class FakePaginatedDocument:
    def __init__(self, pages):
        self._pages = pages
        self.page_count = len(pages)
        self.requested = []
        self.closed = False

    def page_tokens(self, page_number):
        self.requested.append(page_number)
        return list(self._pages[page_number - 1])

    def close(self):
        self.closed = True


class FakePaginatedBackend:
    def __init__(self, pages=(), available=True):
        self.document = FakePaginatedDocument(list(pages))
        self.available = available
        self.opened = []

    def is_available(self):
        return self.available

    def open(self, data):
        self.opened.append(data)
        return self.document


class FakeStructuredBackend:
    def __init__(self, text="", available=True):
        self.text = text
        self.available = available
        self.calls = 0

    def is_available(self):
        return self.available

    def extract_raw_text(self, data):
        self.calls += 1
        return self.text


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def result_payload() -> dict:
    return copy.deepcopy(VALID_RESULT)


@pytest.fixture
def result_json(result_payload) -> str:
    return json.dumps(result_payload)


@pytest.fixture
def invalid_resume_json(result_payload) -> str:
    result_payload["overallScore"] = 0
    result_payload["overallJustification"] = "INVALID_RESUME"
    return json.dumps(result_payload)


@pytest.fixture
def fake_transport():
    return FakeTransport


@pytest.fixture
def paginated_backend():
    return FakePaginatedBackend


@pytest.fixture
def structured_backend():
    return FakeStructuredBackend
