"""
Structured schema the LLM fills in when scoring an interview transcript.
"""
from typing import List, Literal

from pydantic import BaseModel, Field, model_validator

from mock_interviewer.utils.constants import FEEDBACK_CATEGORIES

CategoryName = Literal[
    "Communication Skills",
    "Technical Knowledge",
    "Problem-Solving",
    "Cultural & Role Fit",
    "Confidence & Clarity",
]


class CategoryScore(BaseModel):
    """Score for one fixed evaluation category"""
    name: CategoryName = Field(..., description="Category name")
    score: int = Field(..., ge=0, le=100, description="Score from 0 to 100")
    comment: str = Field(..., description="Explanation for the score")


class FeedbackEvaluation(BaseModel):
    """Complete interview evaluation produced by the evaluator model"""
    total_score: int = Field(..., ge=0, le=100, description="Overall score from 0 to 100")
    category_scores: List[CategoryScore] = Field(
        ...,
        min_length=len(FEEDBACK_CATEGORIES),
        max_length=len(FEEDBACK_CATEGORIES),
        description="Exactly one score for each of the five categories",
    )
    strengths: List[str] = Field(default_factory=list, description="What the candidate did well")
    areas_for_improvement: List[str] = Field(default_factory=list, description="What the candidate should work on")
    final_assessment: str = Field(..., description="Overall written assessment")

    @model_validator(mode="after")
    def order_categories(self) -> "FeedbackEvaluation":
        by_name = {category.name: category for category in self.category_scores}
        if set(by_name) != set(FEEDBACK_CATEGORIES):
            raise ValueError(f"category_scores must cover exactly: {', '.join(FEEDBACK_CATEGORIES)}")
        self.category_scores = [by_name[name] for name in FEEDBACK_CATEGORIES]
        return self

    model_config = {
        "json_schema_extra": {
            "example": {
                "total_score": 72,
                "category_scores": [
                    {"name": "Communication Skills", "score": 80, "comment": "Clear and structured answers"},
                    {"name": "Technical Knowledge", "score": 70, "comment": "Solid grasp of indexing, vague on replication"},
                    {"name": "Problem-Solving", "score": 65, "comment": "Jumped to a solution before clarifying constraints"},
                    {"name": "Cultural & Role Fit", "score": 75, "comment": "Motivation aligns with the role"},
                    {"name": "Confidence & Clarity", "score": 70, "comment": "Hesitant on follow-up questions"},
                ],
                "strengths": ["Structured communication"],
                "areas_for_improvement": ["Clarify requirements before designing"],
                "final_assessment": "A promising candidate who needs more depth on distributed systems.",
            }
        }
    }
