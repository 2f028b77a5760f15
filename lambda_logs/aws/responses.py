"""
Response models for the AWS CLI JSON output we consume
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from lambda_logs.core.log_entry import LogEntry


class FilteredLogEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    event_id: Optional[str] = Field(default=None, alias="eventId")
    log_stream_name: Optional[str] = Field(default=None, alias="logStreamName")
    timestamp: int = 0
    message: Optional[str] = None
    ingestion_time: int = Field(default=0, alias="ingestionTime")

    def to_entry(self) -> LogEntry:
        return LogEntry(
            timestamp=self.timestamp,
            message=self.message or "",
            ingestion_time=self.ingestion_time,
        )


class FilterLogEventsPage(BaseModel):
    """One page of ``aws logs filter-log-events``"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    events: List[FilteredLogEvent] = Field(default_factory=list)
    next_token: Optional[str] = Field(default=None, alias="nextToken")


class FunctionConfiguration(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    function_name: str = Field(alias="FunctionName")
    runtime: Optional[str] = Field(default=None, alias="Runtime")


class ListFunctionsPage(BaseModel):
    """One page of ``aws lambda list-functions``"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    functions: List[FunctionConfiguration] = Field(default_factory=list, alias="Functions")
    next_token: Optional[str] = Field(default=None, alias="NextToken")
