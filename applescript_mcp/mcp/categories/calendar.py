"""Calendar scripts: add an event, list today's events."""
from __future__ import annotations

from pydantic import Field

from applescript_mcp.core.applescript import escape_string
from applescript_mcp.mcp.registry import ScriptCategory, ScriptDefinition
from applescript_mcp.models.base import CamelModel

DATETIME_PATTERN = r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$"


class AddEventArgs(CamelModel):
    title: str = Field(..., description="Event title")
    start_date: str = Field(
        ...,
        pattern=DATETIME_PATTERN,
        description="Start date and time (YYYY-MM-DD HH:MM:SS)",
    )
    end_date: str = Field(
        ...,
        pattern=DATETIME_PATTERN,
        description="End date and time (YYYY-MM-DD HH:MM:SS)",
    )
    calendar: str = Field("Calendar", description="Calendar name (optional)")


def _time_fields(stamp: str) -> tuple[str, str, str]:
    """``(hours, minutes, seconds)`` from ``YYYY-MM-DD HH:MM:SS``."""
    return stamp[11:13], stamp[14:16], stamp[17:19]


def add_event(args: AddEventArgs) -> str:
    start_h, start_m, start_s = _time_fields(args.start_date)
    end_h, end_m, end_s = _time_fields(args.end_date)
    calendar = escape_string(args.calendar or "Calendar")
    title = escape_string(args.title)
    return f"""
tell application "Calendar"
  set theStartDate to current date
  set hours of theStartDate to {start_h}
  set minutes of theStartDate to {start_m}
  set seconds of theStartDate to {start_s}

  set theEndDate to theStartDate + (1 * hours)
  set hours of theEndDate to {end_h}
  set minutes of theEndDate to {end_m}
  set seconds of theEndDate to {end_s}

  tell calendar "{calendar}"
    make new event with properties {{summary:"{title}", start date:theStartDate, end date:theEndDate}}
  end tell
end tell
"""


LIST_TODAY = """
tell application "Calendar"
  set todayStart to (current date)
  set time of todayStart to 0
  set todayEnd to todayStart + 1 * days
  set eventList to {}
  repeat with calendarAccount in calendars
    set eventList to eventList & (every event of calendarAccount whose start date is greater than or equal to todayStart and start date is less than todayEnd)
  end repeat
  set output to ""
  repeat with anEvent in eventList
    set eventStartDate to start date of anEvent
    set eventEndDate to end date of anEvent

    set startHours to hours of eventStartDate
    set startMinutes to minutes of eventStartDate
    set endHours to hours of eventEndDate
    set endMinutes to minutes of eventEndDate

    set output to output & "Event: " & summary of anEvent & linefeed
    set output to output & "Start: " & startHours & ":" & text -2 thru -1 of ("0" & startMinutes) & linefeed
    set output to output & "End: " & endHours & ":" & text -2 thru -1 of ("0" & endMinutes) & linefeed
    set output to output & "-------------------" & linefeed
  end repeat
  return output
end tell
"""


CALENDAR_CATEGORY = ScriptCategory(
    name="calendar",
    description="Calendar operations",
    scripts=(
        ScriptDefinition("add", "Add a new event to Calendar", add_event, AddEventArgs),
        ScriptDefinition("list", "List all events for today", LIST_TODAY),
    ),
)
