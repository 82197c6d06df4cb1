"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import List, Literal, Optional, Union

from enriquecer.domain.models import Category, CategoryTotal, MonthlyPoint, Summary, Transaction

YEAR_MONTH_PATTERN = r"^\d{4}-\d{2}$"


class TransactionCreateRequest(BaseModel):
    """Request body for POST /v1/transactions (one entry form submission)"""

    type: Literal["income", "expense"]
    description: str = Field("", description="Free text, trimmed before storing")
    amount: Union[str, float, None] = Field(None, description="Positive amount; '12,50' is accepted")
    date: Optional[str] = Field(None, description="YYYY-MM-DD, defaults to today")
    category_id: Optional[str] = Field(None, description="Category id from the matching catalog")


class TransactionSchema(BaseModel):
    """Single stored transaction"""

    id: str
    type: Literal["income", "expense"]
    date: str
    description: str
    amount: float
    category: Optional[str] = None

    @classmethod
    def from_domain(cls, txn: Transaction) -> "TransactionSchema":
        return cls(
            id=txn.id,
            type=txn.type.value,
            date=txn.date,
            description=txn.description,
            amount=txn.amount,
            category=txn.category,
        )


class TransactionListResponse(BaseModel):
    """Response for GET /v1/transactions"""

    month: Optional[str] = None
    transactions: List[TransactionSchema]


class ValidationIssueSchema(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """422 body when a form draft is rejected"""

    detail: str = "Invalid transaction"
    issues: List[ValidationIssueSchema]


class SummarySchema(BaseModel):
    income: float
    expense: float
    result: float
    transactions: List[TransactionSchema]

    @classmethod
    def from_domain(cls, summary: Summary) -> "SummarySchema":
        return cls(
            income=summary.income,
            expense=summary.expense,
            result=summary.result,
            transactions=[TransactionSchema.from_domain(t) for t in summary.transactions],
        )


class CategoryTotalSchema(BaseModel):
    name: str
    value: float

    @classmethod
    def from_domain(cls, total: CategoryTotal) -> "CategoryTotalSchema":
        return cls(name=total.name, value=total.value)


class SummaryResponse(BaseModel):
    """Response for GET /v1/summary"""

    year_month: str
    month: SummarySchema
    cumulative: SummarySchema
    expense_by_category: List[CategoryTotalSchema]


class MonthlyPointSchema(BaseModel):
    month: str
    income: float
    expense: float
    result: float

    @classmethod
    def from_domain(cls, point: MonthlyPoint) -> "MonthlyPointSchema":
        return cls(month=point.month, income=point.income, expense=point.expense, result=point.result)


class SeriesResponse(BaseModel):
    """Response for GET /v1/series"""

    series: List[MonthlyPointSchema]


class YearsResponse(BaseModel):
    """Response for GET /v1/years"""

    years: List[str]


class CategorySchema(BaseModel):
    id: str
    name: str

    @classmethod
    def from_domain(cls, category: Category) -> "CategorySchema":
        return cls(id=category.id, name=category.name)


class CategoryListResponse(BaseModel):
    """Response for GET /v1/categories"""

    type: Literal["income", "expense"]
    categories: List[CategorySchema]


class CategoryRequest(BaseModel):
    """Request body for POST and PATCH /v1/categories"""

    name: str = Field(..., description="Display name")


class ImportResponse(BaseModel):
    """Response for POST /v1/backup/import"""

    imported: int
    message: str = "Dados importados com sucesso!"
