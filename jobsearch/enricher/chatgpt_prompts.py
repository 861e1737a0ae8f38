"""Prompts for the chat-model assistant.

This module contains the system prompts and user-prompt builders used by
ChatGPTClient.
"""

ENHANCE_SEARCH_SYSTEM_PROMPT = (
    "You are a job search assistant. Given a list of skills, produce search-optimized "
    "job keywords, likely locations and seniority levels. Return ONLY valid JSON in this "
    'exact format: {"keywords": ["..."], "locations": ["..."], "seniority": ["..."]}. '
    "Return no other text."
)

SCORE_JOBS_SYSTEM_PROMPT = (
    "You are a job matching assistant. Analyze how well a resume matches each job "
    "description. Return ONLY valid JSON in this exact format: "
    '{"scores": [{"id": "job-id", "matchScore": 85, "recommendation": "high"}]}. '
    "matchScore must be 0-100. recommendation must be \"high\" (score >= 80), "
    "\"medium\" (score >= 50) or \"low\" (score < 50). Consider skills, experience and "
    "job requirements. Include every job id exactly once. Return no other text."
)

# Excerpt sizes sent to the model
RESUME_EXCERPT_CHARS = 500
JOB_DESCRIPTION_CHARS = 1000


def build_enhance_search_prompt(skills: list[str]) -> str:
    return f"Skills: {', '.join(skills)}"


def build_score_jobs_prompt(resume_text: str, jobs: list[dict[str, str]], skills: list[str]) -> str:
    """
    Build the user prompt for one scoring batch.

    Args:
        resume_text: Candidate resume text
        jobs: Dicts with id, title, company and description
        skills: Candidate skills
    """
    skills_text = ", ".join(skills) if skills else "Not specified"
    lines = [
        f"Resume skills: {skills_text}",
        "",
        f"Resume excerpt (first {RESUME_EXCERPT_CHARS} chars): "
        f"{resume_text[:RESUME_EXCERPT_CHARS]}",
        "",
        "Jobs:",
    ]
    for job in jobs:
        lines.append(
            f"- id: {job['id']}\n  Job: {job['title']} at {job['company']}\n"
            f"  Job description: {job['description'][:JOB_DESCRIPTION_CHARS]}"
        )
    return "\n".join(lines)
