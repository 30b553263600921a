"""
iMessage operations.

Message history is read straight from ``~/Library/Messages/chat.db`` with the
``sqlite3`` command line tool. The query travels as a single argument
(``quoted form of``), so the shell never parses any of its text.

User-supplied search values are escaped twice: SQL quote doubling first, then
AppleScript string escaping, since the query text sits inside an AppleScript
string literal.
"""
from __future__ import annotations

from pydantic import Field

from applescript_mcp.core.applescript import boolean, escape_sql, escape_string, quote
from applescript_mcp.mcp.registry import ScriptCategory, ScriptDefinition
from applescript_mcp.models.base import CamelModel

# Message timestamps are nanoseconds since 2001-01-01.
MESSAGE_DATE_COLUMN = (
    "datetime(message.date/1000000000 + strftime('%s', '2001-01-01'), "
    "'unixepoch', 'localtime') as message_date"
)

MESSAGE_JOINS = """FROM
    message
    LEFT JOIN handle ON message.handle_id = handle.ROWID
    LEFT JOIN chat_message_join ON message.ROWID = chat_message_join.message_id
    LEFT JOIN chat ON chat_message_join.chat_id = chat.ROWID"""


class ListChatsArgs(CamelModel):
    include_participant_details: bool = Field(
        False, description="Include detailed participant information"
    )


class GetMessagesArgs(CamelModel):
    limit: int = Field(100, ge=1, description="Maximum number of messages to retrieve")


class SearchMessagesArgs(CamelModel):
    search_text: str = Field(..., description="Text to search for in messages")
    sender: str | None = Field(
        None, description="Search for messages from a specific sender (phone number or email)"
    )
    chat_id: str | None = Field(None, description="Limit search to a specific chat ID")
    limit: int = Field(50, ge=1, description="Maximum number of messages to retrieve")
    days_back: int = Field(30, ge=0, description="Limit search to messages from the last N days")


class ComposeMessageArgs(CamelModel):
    recipient: str = Field(..., description="Phone number or email of the recipient")
    body: str = Field("", description="Message body text")
    auto: bool = Field(
        False, description="Automatically send the message without user confirmation"
    )


PARTICIPANT_DETAILS = """
    set participantList to {}
    repeat with aParticipant in participants of aChat
      set participantInfo to {id:id of aParticipant, handle:handle of aParticipant}
      try
        set participantInfo to participantInfo & {name:name of aParticipant}
      end try
      copy participantInfo to end of participantList
    end repeat
    set chatInfo to chatInfo & {participant:participantList}
"""


def list_chats(args: ListChatsArgs) -> str:
    details = PARTICIPANT_DETAILS if args.include_participant_details else ""
    return f"""
tell application "Messages"
  set chatList to {{}}
  repeat with aChat in chats
    set chatName to name of aChat
    if chatName is missing value then
      set chatName to ""
      try
        set theParticipants to participants of aChat
        if (count of theParticipants) is 1 then
          set theParticipant to item 1 of theParticipants
          set chatName to name of theParticipant
        end if
      end try
    end if

    set chatInfo to {{id:id of aChat, name:chatName, isGroupChat:(id of aChat contains "+")}}
{details}
    copy chatInfo to end of chatList
  end repeat
  return chatList
end tell
"""


def _sqlite_query_script(sql: str) -> str:
    """Run ``sql`` against chat.db and return the result rows as a list."""
    return f"""
on run
  set dbPath to (do shell script "echo ~/Library/Messages/chat.db")
  set queryText to "{escape_string(sql)}"

  set queryResult to do shell script "sqlite3 " & quoted form of dbPath & " " & quoted form of queryText

  set resultList to paragraphs of queryResult
  set messageData to {{}}
  repeat with messageLine in resultList
    set messageData to messageData & messageLine
  end repeat

  return messageData
end run
"""


def get_messages(args: GetMessagesArgs) -> str:
    sql = f"""SELECT
    {MESSAGE_DATE_COLUMN},
    handle.id as sender,
    message.text as message_text,
    chat.display_name as chat_name
{MESSAGE_JOINS}
ORDER BY
    message.date DESC
LIMIT {args.limit};"""
    return _sqlite_query_script(sql)


def search_where_clause(args: SearchMessagesArgs) -> str:
    """SQL ``WHERE`` body for a message search; ``1=1`` when unconstrained."""
    conditions = []
    if args.search_text:
        conditions.append(f"message.text LIKE '%{escape_sql(args.search_text)}%'")
    if args.sender:
        conditions.append(f"handle.id LIKE '%{escape_sql(args.sender)}%'")
    if args.chat_id:
        conditions.append(f"chat.chat_identifier = '{escape_sql(args.chat_id)}'")
    if args.days_back:
        conditions.append(
            f"message.date > (strftime('%s', 'now', '-{args.days_back} days') "
            "- strftime('%s', '2001-01-01')) * 1000000000"
        )
    return " AND ".join(conditions) or "1=1"


def search_messages(args: SearchMessagesArgs) -> str:
    sql = f"""SELECT
    {MESSAGE_DATE_COLUMN},
    handle.id as sender,
    message.text as message_text,
    chat.display_name as chat_name,
    chat.chat_identifier as chat_id
{MESSAGE_JOINS}
WHERE
    {search_where_clause(args)}
ORDER BY
    message.date DESC
LIMIT {args.limit};"""
    return _sqlite_query_script(sql)


def compose_message(args: ComposeMessageArgs) -> str:
    recipient = quote(args.recipient)
    body = quote(args.body or "")
    return f"""
on run
  set recipient to {recipient}
  set messageBody to {body}
  set autoSend to {boolean(args.auto)}

  if autoSend then
    tell application "Messages"
      set targetService to 1st service whose service type = iMessage
      set targetBuddy to buddy recipient of targetService
      send messageBody to targetBuddy
      return "Message sent to " & recipient
    end tell
  else
    set smsURL to "sms:" & recipient

    if messageBody is not equal to "" then
      set encodedBody to ""
      repeat with i from 1 to count of characters of messageBody
        set c to character i of messageBody
        if c is space then
          set encodedBody to encodedBody & "%20"
        else
          set encodedBody to encodedBody & c
        end if
      end repeat

      set smsURL to smsURL & "&body=" & encodedBody
    end if

    do shell script "open " & quoted form of smsURL

    return "Opening Messages app with recipient: " & recipient
  end if
end run
"""


MESSAGES_CATEGORY = ScriptCategory(
    name="messages",
    description="iMessage operations",
    scripts=(
        ScriptDefinition("list_chats", "List available iMessage and SMS chats", list_chats, ListChatsArgs),
        ScriptDefinition("get_messages", "Get messages from the Messages app", get_messages, GetMessagesArgs),
        ScriptDefinition(
            "search_messages",
            "Search for messages containing specific text or from a specific sender",
            search_messages,
            SearchMessagesArgs,
        ),
        ScriptDefinition(
            "compose_message",
            "Open Messages app with a pre-filled message to a recipient or "
            "automatically send a message",
            compose_message,
            ComposeMessageArgs,
        ),
    ),
)
