from pydantic import BaseModel, Field


class AnalyzeProfilesRequest(BaseModel):
    job_description: str = Field(..., max_length=10000, description="Job description text")
