"""Prompt, system instruction and response schema for the Gemini analysis call."""

from models.file_content import FileContent, TextContent
from models.requests import AnalysisRequest

INVALID_RESUME_MARKER = "INVALID_RESUME"

SYSTEM_INSTRUCTION = f"""
You are an expert ATS Resume Analyzer, Career Recruiter, and Professional Resume Coach with 15+ years of experience.
Your job is to analyze resumes realistically and honestly. Do not exaggerate scores.

STEP 1: VALIDATION
First, determine if the provided text is actually a resume or CV.
- A valid resume must have: Name/Contact, Experience/Projects, Education, or Skills.
- If it is NOT a resume (e.g., essay, recipe, code snippet, blank text, homework), you MUST fail the analysis gracefully:
  - Set 'overallScore' to 0.
  - Set 'overallJustification' to exactly "{INVALID_RESUME_MARKER}".
  - Fill other required fields with empty/dummy strings to satisfy the schema (e.g., "N/A").

STEP 2: ANALYSIS (Only if Valid)
Analyze structure, content, ATS compatibility, clarity, and impact.
You must also infer the candidate's likely target job roles based on their skills and experience.
"""

ANALYSIS_PROMPT = f"""
Analyze the following resume.
Validation Check: Is this a resume? If no, return overallScore: 0 and overallJustification: "{INVALID_RESUME_MARKER}".
If yes:
1. Identify the candidate's primary job role based on their experience.
2. Suggest 2 other related roles they might fit.
3. Evaluate keywords found and missing for their primary role.
4. Provide specific actionable feedback.
"""


def _string_list(description: str | None = None) -> dict:
    schema = {"type": "ARRAY", "items": {"type": "STRING"}}
    if description:
        schema["description"] = description
    return schema


RESPONSE_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "overallScore": {
            "type": "NUMBER",
            "description": "Score out of 10. Set to 0 if invalid resume.",
        },
        "overallJustification": {
            "type": "STRING",
            "description": f"Short justification. If invalid, this MUST start with '{INVALID_RESUME_MARKER}'.",
        },
        "sectionAnalysis": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "sectionName": {"type": "STRING"},
                    "strengths": _string_list(),
                    "weaknesses": _string_list(),
                    "improvementSuggestions": _string_list(),
                },
                "required": ["sectionName", "strengths", "weaknesses", "improvementSuggestions"],
            },
        },
        "atsCompatibility": {
            "type": "OBJECT",
            "properties": {
                "score": {"type": "NUMBER", "description": "Score out of 10 for parseability"},
                "issues": _string_list(),
            },
            "required": ["score", "issues"],
        },
        "keywordAnalysis": {
            "type": "OBJECT",
            "properties": {
                "found": _string_list("Important keywords found in the resume"),
                "missing": _string_list("Standard industry keywords missing for the inferred role"),
            },
            "required": ["found", "missing"],
        },
        "jobMatches": {
            "type": "ARRAY",
            "description": "Top 3 job roles this resume fits best",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "role": {"type": "STRING", "description": "Job title"},
                    "matchPercentage": {"type": "NUMBER", "description": "0-100"},
                    "reason": {"type": "STRING", "description": "Brief reason for score"},
                },
                "required": ["role", "matchPercentage", "reason"],
            },
        },
        "contentQuality": {
            "type": "OBJECT",
            "properties": {
                "actionVerbsUsage": {"type": "STRING"},
                "quantifiedAchievements": {"type": "STRING"},
                "clarity": {"type": "STRING"},
                "professionalTone": {"type": "STRING"},
            },
            "required": ["actionVerbsUsage", "quantifiedAchievements", "clarity", "professionalTone"],
        },
        "dos": _string_list(),
        "donts": _string_list(),
        "specificImprovements": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "section": {"type": "STRING"},
                    "problem": {"type": "STRING"},
                    "suggestedRewrite": {"type": "STRING"},
                },
                "required": ["section", "problem", "suggestedRewrite"],
            },
        },
        "finalVerdict": {
            "type": "OBJECT",
            "properties": {
                "impression": {"type": "STRING"},
                "strength": {"type": "STRING", "enum": ["Strong", "Average", "Weak"]},
                "priorityImprovements": _string_list(),
            },
            "required": ["impression", "strength", "priorityImprovements"],
        },
    },
    "required": [
        "overallScore",
        "overallJustification",
        "sectionAnalysis",
        "atsCompatibility",
        "keywordAnalysis",
        "jobMatches",
        "contentQuality",
        "dos",
        "donts",
        "specificImprovements",
        "finalVerdict",
    ],
}


def build_contents(content: FileContent) -> str | dict:
    """Text goes inline after the prompt; images become a two-part message."""
    if isinstance(content, TextContent):
        return f"{ANALYSIS_PROMPT}\n\nRESUME CONTENT:\n{content.content}"
    return {
        "parts": [
            {"text": ANALYSIS_PROMPT},
            {"inline_data": {"mime_type": content.mime_type, "data": content.data}},
        ]
    }


def build_analysis_request(content: FileContent) -> AnalysisRequest:
    return AnalysisRequest(
        contents=build_contents(content),
        system_instruction=SYSTEM_INSTRUCTION,
        temperature=0.0,
        response_mime_type="application/json",
        response_schema=RESPONSE_SCHEMA,
    )
