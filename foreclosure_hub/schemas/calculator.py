from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional, Literal
from datetime import datetime

PropertyType = Literal["single_family", "condo", "townhouse", "multi_family"]
PropertyCondition = Literal["excellent", "good", "fair", "poor"]
SaleOptionType = Literal["traditional", "cash_offer", "short_sale"]

# --- 1. PROPERTY VALUE ESTIMATOR ---
class PropertyDetails(BaseModel):
    zip_code: str = Field(..., pattern=r"^\d{5}$")
    property_type: PropertyType
    square_feet: int = Field(..., ge=100, le=50000)
    bedrooms: int = Field(..., ge=0, le=20)
    bathrooms: int = Field(..., ge=0, le=20)
    condition: PropertyCondition

class ValuationRange(BaseModel):
    low: int
    mid: int
    high: int

class ValuationBreakdown(BaseModel):
    base_value: int
    type_adjustment: int
    condition_adjustment: int
    bedroom_adjustment: int
    bathroom_adjustment: int

class ValuationResponse(BaseModel):
    estimated_value: int
    valuation_range: ValuationRange
    price_per_sqft: int
    breakdown: ValuationBreakdown
    confidence: Literal["high", "medium", "low"]
    zip_code_found: bool

class PropertyValueLeadRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr

class PropertyValueLeadResponse(BaseModel):
    success: bool
    lead_id: int

# --- 2. SALE OPTIONS COMPARISON ---
class SaleOptionsRequest(BaseModel):
    property_value: float = Field(..., gt=0)
    mortgage_balance: float = Field(..., ge=0)

class SaleOptionCosts(BaseModel):
    agent_commission: float
    closing_costs: float
    repairs: float
    total: float

class SaleOption(BaseModel):
    type: SaleOptionType
    name: str
    timeline: str
    timeline_days: int
    gross_proceeds: float
    costs: SaleOptionCosts
    net_proceeds: float
    pros: List[str]
    cons: List[str]
    recommended: bool
    description: str

class SaleOptionsResponse(BaseModel):
    property_value: float
    mortgage_balance: float
    equity: float
    equity_percentage: float
    recommended: SaleOptionType
    options: List[SaleOption]

# --- 3. FULL REPORT (estimate + comparison) ---
class ComparisonReportRequest(PropertyDetails):
    property_address: Optional[str] = Field(None, max_length=255)
    mortgage_balance: int = Field(..., ge=0)

class ComparisonEmailRequest(ComparisonReportRequest):
    email: EmailStr
    first_name: Optional[str] = Field(None, max_length=100)

class ComparisonReportResponse(BaseModel):
    valuation: ValuationResponse
    comparison: SaleOptionsResponse

# --- 4. SAVED COMPARISONS ---
class SavedComparisonResponse(BaseModel):
    id: int
    property_address: Optional[str] = None
    zip_code: str
    property_type: str
    square_feet: int
    bedrooms: int
    bathrooms: int
    condition: str
    estimated_value: int
    mortgage_balance: int
    equity: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class SavedComparisonDetail(SavedComparisonResponse):
    comparison: SaleOptionsResponse
