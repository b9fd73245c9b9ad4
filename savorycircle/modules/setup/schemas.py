from pydantic import BaseModel, Field
from typing import Dict, List


class DatabaseCheckResult(BaseModel):
    tables_exist: Dict[str, bool] = Field(
        default_factory=lambda: {"favorite_foods": False, "meal_plans": False}
    )
    errors: List[str] = []
    success: bool = False


class AutoSetupResponse(BaseModel):
    success: bool
    check: DatabaseCheckResult
