from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Wire fields are camelCase; Python attributes stay snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SectionAnalysis(_CamelModel):
    section_name: str
    strengths: list[str]
    weaknesses: list[str]
    improvement_suggestions: list[str]


class AtsCompatibility(_CamelModel):
    score: float
    issues: list[str]


class KeywordAnalysis(_CamelModel):
    found: list[str]
    missing: list[str]


class JobMatch(_CamelModel):
    role: str
    match_percentage: float
    reason: str


class ContentQuality(_CamelModel):
    action_verbs_usage: str
    quantified_achievements: str
    clarity: str
    professional_tone: str


class SpecificImprovement(_CamelModel):
    section: str
    problem: str
    suggested_rewrite: str


class FinalVerdict(_CamelModel):
    impression: str
    strength: Literal["Strong", "Average", "Weak"]
    priority_improvements: list[str]


class AnalysisResult(_CamelModel):
    """Structured analysis returned by the model.

    Every field is required: an incomplete response fails validation
    instead of being filled with defaults.
    """

    overall_score: float
    overall_justification: str
    section_analysis: list[SectionAnalysis]
    ats_compatibility: AtsCompatibility
    keyword_analysis: KeywordAnalysis
    job_matches: list[JobMatch]
    content_quality: ContentQuality
    dos: list[str]
    donts: list[str]
    specific_improvements: list[SpecificImprovement]
    final_verdict: FinalVerdict


class ErrorKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    SERVICE_UNAVAILABLE = "service_unavailable"
    AUTH_ERROR = "auth_error"
    NETWORK_ERROR = "network_error"
    UNKNOWN = "unknown"


class ClassifiedError(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    kind: ErrorKind
    user_message: str
    retry_after_seconds: int | None = None


class AnalysisOutcome(_CamelModel):
    """Result of one pipeline run: exactly one of ``result``/``error`` is set."""

    result: AnalysisResult | None = None
    error: ClassifiedError | None = None
    error_type: str | None = None
    client_error: bool = False

    @property
    def ok(self) -> bool:
        return self.result is not None
