from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class DashboardStats(BaseModel):
    total_tasks: int = 0
    completed_tasks: int = 0
    pending_payments: int = 0
    progress: float = 0

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class AdminTotals(BaseModel):
    total_users: int = 0
    global_tasks: int = 0
    global_spent: float = 0

    class Config:
        alias_generator = to_camel
        populate_by_name = True
