"""Payment proof schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class PaymentProofResponse(BaseModel):
    proofId: int
    clientId: int
    fileUrl: str
    uploadedAt: Optional[datetime] = None


class PaymentProofCreated(BaseModel):
    proofId: int
    fileUrl: str
    message: str
