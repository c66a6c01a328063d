"""
Public holiday schemas - Nager.Date API responses.

Reference: https://date.nager.at/Api (GET /PublicHolidays/{year}/{countryCode})
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class PublicHoliday(BaseModel):
    """
    A public holiday entry.

    Example:
        {"date": "2024-01-26", "localName": "Republic Day", "name": "Republic Day",
         "countryCode": "IN", "global": true, "types": ["Public"]}
    """
    date: str = Field(..., description="YYYY-MM-DD")
    local_name: Optional[str] = Field(None, alias="localName")
    name: str = Field(..., description="English name")
    country_code: Optional[str] = Field(None, alias="countryCode")
    global_: bool = Field(True, alias="global", description="Observed nationwide")
    counties: Optional[List[str]] = Field(None)
    types: Optional[List[str]] = Field(None)

    class Config:
        populate_by_name = True
