from pydantic import BaseModel


class PolicyExtraction(BaseModel):
    text: str | None = None
    min_age: int | None = None
    stage: str | None = None  # name of the stage that produced the result
