from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class SearchRequest(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    time: str = Field(..., description="HH:MM, 24-hour")
    location: Optional[str] = Field(None, description="Airport or station, e.g. 'CDG Airport'")
    terminal: Optional[str] = Field(None, description="Terminal, e.g. 'T2' or '2'")


class MatchOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    arrival_time: str = Field(..., alias="arrivalTime", description="12-hour clock, e.g. '2:30 PM'")
    location: str
    terminal: str
    contact: str
    luggage: str


class EntryOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(..., description="Date cell as typed in the sheet")
    name: str
    arrival_time: str = Field(..., alias="arrivalTime", description="12-hour clock or 'N/A'")
    location: str
    terminal: str
    luggage: str


class SearchResponse(BaseModel):
    matches: list[MatchOut]


class EntriesResponse(BaseModel):
    entries: list[EntryOut]
