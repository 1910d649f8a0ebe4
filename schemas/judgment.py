"""Schema for the narrative-judgment collaborator's structured reply.

The LLM is asked for camelCase JSON; snake_case keys are accepted too.
Anything that does not validate against these models is rejected outright.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class JudgedArticle(BaseModel):
    model_config = {"frozen": True, "populate_by_name": True}

    title: str
    similarity: int = Field(ge=0, le=100)
    url: str = ""


class JudgedOutlet(BaseModel):
    model_config = {"frozen": True, "populate_by_name": True}

    outlet: str
    verified: bool
    similarity: int = Field(ge=0, le=100)
    articles: list[JudgedArticle] = Field(default_factory=list)


class NarrativeJudgment(BaseModel):
    model_config = {"frozen": True, "populate_by_name": True}

    outlets: list[JudgedOutlet]
    legitimacy_score: int = Field(alias="legitimacyScore", ge=0, le=100)
    topics: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    dates: list[str] = Field(default_factory=list)
    credibility_indicators: list[str] = Field(default_factory=list, alias="credibilityIndicators")
    red_flags: list[str] = Field(default_factory=list, alias="redFlags")
    overall_assessment: str = Field(default="", alias="overallAssessment")

    def outlet(self, name: str) -> JudgedOutlet | None:
        """Return the judgment for *name* (case-insensitive), if present."""
        for item in self.outlets:
            if item.outlet.strip().lower() == name.lower():
                return item
        return None
