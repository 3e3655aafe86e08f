"""Prompt template for the candidate scoring call."""

# Relative weight of each category in the overall score
CATEGORY_WEIGHTS: dict[str, int] = {
    "technical_skills": 30,
    "experience": 30,
    "education": 15,
    "soft_skills": 15,
    "cultural_fit": 10,
}


def build_scoring_prompt(profile_text: str, job_description: str) -> str:
    """Ask for a strict-JSON assessment of one candidate against one job.

    Both texts are embedded verbatim.
    """
    weights = "\n".join(f"- {name} ({weight}% weight)" for name, weight in CATEGORY_WEIGHTS.items())

    return f"""You are an expert recruiter and HR specialist. Analyse this CV against this job offer and provide a detailed score.

JOB OFFER:
{job_description}

CV TO ANALYSE:
{profile_text}

CATEGORY WEIGHTS:
{weights}

Respond with the following strict JSON format:
{{
  "candidate_name": "<candidate name if found>",
  "overall_score": <integer 0-100>,
  "detailed_scores": {{
    "technical_skills": {{"score": <integer 0-100>, "explanation": "<one sentence>"}},
    "experience": {{"score": <integer 0-100>, "explanation": "<one sentence>"}},
    "education": {{"score": <integer 0-100>, "explanation": "<one sentence>"}},
    "soft_skills": {{"score": <integer 0-100>, "explanation": "<one sentence>"}},
    "cultural_fit": {{"score": <integer 0-100>, "explanation": "<one sentence>"}}
  }},
  "strengths": [<2-5 specific strengths>],
  "weaknesses": [<2-5 specific gaps>],
  "recommendation": "<one of HIGHLY_RECOMMENDED, RECOMMENDED, CONDITIONAL, NOT_RECOMMENDED>",
  "summary": "<2-3 sentences explaining why this candidate does or does not fit the role>"
}}

IMPORTANT:
- Respond ONLY with the JSON, no additional text and no code fences
- Make sure the JSON is valid
- Scores range from 0 to 100
- The overall score must be a weighted average of the detailed scores
- Be objective and precise in your assessment"""
