from pydantic import BaseModel
from typing import Optional, Dict, Any


class SuccessResponse(BaseModel):
    success: bool
    data: Optional[Dict[str, Any]] = None
    message: Optional[str] = None
