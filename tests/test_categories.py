"""Tests for the AppleScript producers in applescript_mcp/mcp/categories.

Scripts are checked for the fragments that carry user input; escaping must
keep every value inside its string literal.
"""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from applescript_mcp.mcp.categories.calendar import AddEventArgs, add_event
from applescript_mcp.mcp.categories.clipboard import (
    GET_CLIPBOARD_FILE_PATHS,
    GET_CLIPBOARD_TEXT,
    GetClipboardArgs,
    SetClipboardArgs,
    get_clipboard,
    set_clipboard,
)
from applescript_mcp.mcp.categories.finder import SearchFilesArgs, search_files
from applescript_mcp.mcp.categories.iterm import RunCommandArgs, run_command
from applescript_mcp.mcp.categories.mail import (
    CreateEmailArgs,
    GetEmailArgs,
    ListEmailsArgs,
    create_email,
    get_email,
    list_emails,
)
from applescript_mcp.mcp.categories.messages import (
    ComposeMessageArgs,
    GetMessagesArgs,
    ListChatsArgs,
    SearchMessagesArgs,
    compose_message,
    get_messages,
    list_chats,
    search_messages,
    search_where_clause,
)
from applescript_mcp.mcp.categories.notifications import SendNotificationArgs, send_notification
from applescript_mcp.mcp.categories.pages import CreateDocumentArgs, create_document
from applescript_mcp.mcp.categories.shortcuts import (
    ListShortcutsArgs,
    RunShortcutArgs,
    list_shortcuts,
    run_shortcut,
)
from applescript_mcp.mcp.categories.system import (
    QuitAppArgs,
    VolumeArgs,
    quit_app,
    set_volume,
    volume_step,
)


# ---------------------------------------------------------------------------
# system
# ---------------------------------------------------------------------------


class TestSystem:

    @pytest.mark.parametrize(
        "level, step",
        [(0, 0), (7, 0), (8, 1), (50, 4), (64, 4), (65, 5), (100, 7)],
    )
    def test_volume_step(self, level: float, step: int) -> None:
        assert volume_step(level) == step

    def test_set_volume_script(self) -> None:
        assert set_volume(VolumeArgs(level=100)) == "set volume 7"

    def test_volume_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            VolumeArgs(level=101)

    def test_quit_app_force(self) -> None:
        assert "quit saving no" in quit_app(QuitAppArgs(name="TextEdit", force=True))
        assert "quit saving no" not in quit_app(QuitAppArgs(name="TextEdit"))

    def test_app_name_escaped(self) -> None:
        script = quit_app(QuitAppArgs(name='Evil" & do shell script "x'))
        assert 'tell application "Evil\\" & do shell script \\"x"' in script


# ---------------------------------------------------------------------------
# calendar
# ---------------------------------------------------------------------------


class TestCalendar:

    def test_time_fields_extracted(self) -> None:
        script = add_event(AddEventArgs(
            title="Standup",
            start_date="2024-03-01 09:30:00",
            end_date="2024-03-01 10:15:45",
        ))
        assert "set hours of theStartDate to 09" in script
        assert "set minutes of theStartDate to 30" in script
        assert "set minutes of theEndDate to 15" in script
        assert "set seconds of theEndDate to 45" in script
        assert 'tell calendar "Calendar"' in script
        assert 'summary:"Standup"' in script

    def test_bad_date_format_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AddEventArgs(title="x", start_date="tomorrow", end_date="2024-03-01 10:00:00")

    def test_title_escaped(self) -> None:
        script = add_event(AddEventArgs(
            title='Say "hi"',
            start_date="2024-03-01 09:00:00",
            end_date="2024-03-01 10:00:00",
            calendar="Work",
        ))
        assert 'summary:"Say \\"hi\\""' in script
        assert 'tell calendar "Work"' in script


# ---------------------------------------------------------------------------
# finder
# ---------------------------------------------------------------------------


class TestFinder:

    def test_search_location_used(self) -> None:
        script = search_files(SearchFilesArgs(query="report", location="/Users/me/Documents"))
        assert 'set searchPath to "/Users/me/Documents"' in script
        assert 'whose name contains "report"' in script

    def test_search_defaults_to_home(self) -> None:
        script = search_files(SearchFilesArgs(query="report"))
        assert 'set searchPath to "~"' in script
        assert "path to home folder" in script


# ---------------------------------------------------------------------------
# clipboard
# ---------------------------------------------------------------------------


class TestClipboard:

    def test_get_text_by_default(self) -> None:
        assert get_clipboard(GetClipboardArgs()) == GET_CLIPBOARD_TEXT

    def test_get_file_paths(self) -> None:
        assert get_clipboard(GetClipboardArgs(type="file_paths")) == GET_CLIPBOARD_FILE_PATHS

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GetClipboardArgs(type="image")

    def test_set_escapes_content(self) -> None:
        script = set_clipboard(SetClipboardArgs(content='a\\b "c"'))
        assert 'set the clipboard to "a\\\\b \\"c\\""' in script


# ---------------------------------------------------------------------------
# notifications, iterm, pages
# ---------------------------------------------------------------------------


class TestNotifications:

    def test_with_sound(self) -> None:
        script = send_notification(SendNotificationArgs(title="T", message="M"))
        assert script == 'display notification "M" with title "T" sound name "default"'

    def test_without_sound(self) -> None:
        script = send_notification(SendNotificationArgs(title="T", message="M", sound=False))
        assert script == 'display notification "M" with title "T"'


class TestIterm:

    def test_current_window(self) -> None:
        script = run_command(RunCommandArgs(command='echo "hi"'))
        assert "set w to current window" in script
        assert 'write text "echo \\"hi\\""' in script

    def test_new_window(self) -> None:
        script = run_command(RunCommandArgs.model_validate({"command": "ls", "newWindow": True}))
        assert "create window with default profile" in script


class TestPages:

    def test_content_escaped(self) -> None:
        script = create_document(CreateDocumentArgs(content='Quote: "x"'))
        assert 'set the body text of newDoc to "Quote: \\"x\\""' in script


# ---------------------------------------------------------------------------
# shortcuts
# ---------------------------------------------------------------------------


class TestShortcuts:

    def test_run_without_input(self) -> None:
        script = run_shortcut(RunShortcutArgs(name="Morning"))
        assert 'run shortcut "Morning"\n' in script
        assert 'tell application "Shortcuts Events"' in script

    def test_run_with_input(self) -> None:
        script = run_shortcut(RunShortcutArgs(name="Echo", input='say "x"'))
        assert 'run shortcut "Echo" with input "say \\"x\\""' in script

    def test_list_with_limit(self) -> None:
        script = list_shortcuts(ListShortcutsArgs(limit=3))
        assert "items 1 through 3 of shortcutNames" in script

    def test_list_without_limit(self) -> None:
        assert "items 1 through" not in list_shortcuts(ListShortcutsArgs())


# ---------------------------------------------------------------------------
# mail
# ---------------------------------------------------------------------------


class TestMail:

    def test_create_email_uses_mailto(self) -> None:
        script = create_email(CreateEmailArgs(recipient="a@b.c", subject="Hi", body='x "y"'))
        assert 'set recipient to "a@b.c"' in script
        assert 'set body to "x \\"y\\""' in script
        assert "on urlEncode(theText)" in script

    def test_list_emails_header(self) -> None:
        script = list_emails(ListEmailsArgs.model_validate({"count": 5, "unreadOnly": True}))
        assert 'set mailboxName to "Inbox"' in script
        assert 'set accountName to "iCloud"' in script
        assert "set messageCount to 5" in script
        assert "set showUnreadOnly to true" in script
        assert "set searchAllAccounts to true" in script
        assert "set fallBackToInbox to true" in script

    def test_list_emails_named_account(self) -> None:
        script = list_emails(ListEmailsArgs(account="Gmail"))
        assert 'set accountName to "Gmail"' in script
        assert "set searchAllAccounts to false" in script

    def test_get_email_criteria(self) -> None:
        script = get_email(GetEmailArgs.model_validate({
            "subject": 'Invoice "March"',
            "dateReceived": "2024-03-01",
            "includeBody": True,
        }))
        assert 'set searchSubject to "Invoice \\"March\\""' in script
        assert 'set searchSender to ""' in script
        assert 'set searchDate to "2024-03-01"' in script
        assert "set includeBody to true" in script
        assert "set fallBackToInbox to false" in script

    def test_count_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ListEmailsArgs(count=0)


# ---------------------------------------------------------------------------
# messages
# ---------------------------------------------------------------------------


class TestMessages:

    def test_where_clause_all_filters(self) -> None:
        clause = search_where_clause(SearchMessagesArgs.model_validate({
            "searchText": "it's",
            "sender": "+1555",
            "chatId": "chat1",
            "daysBack": 7,
        }))
        parts = clause.split(" AND ")
        assert parts[0] == "message.text LIKE '%it''s%'"
        assert parts[1] == "handle.id LIKE '%+1555%'"
        assert parts[2] == "chat.chat_identifier = 'chat1'"
        assert "'-7 days'" in parts[3]

    def test_where_clause_unconstrained(self) -> None:
        args = SearchMessagesArgs.model_validate({"searchText": "", "daysBack": 0})
        assert search_where_clause(args) == "1=1"

    def test_search_query_escaped_for_applescript(self) -> None:
        script = search_messages(SearchMessagesArgs(search_text='say "hi"'))
        assert "message.text LIKE '%say \\\"hi\\\"%'" in script
        assert "LIMIT 50;" in script
        assert "quoted form of queryText" in script

    def test_search_text_cannot_reach_the_shell(self) -> None:
        hostile = "x\nEOF\ntouch /tmp/owned\ncat > /dev/null << 'EOF'"
        script = search_messages(SearchMessagesArgs(search_text=hostile))
        lines = [line.strip() for line in script.splitlines()]
        assert "touch /tmp/owned" not in lines
        assert "EOF" not in lines
        assert "<<" not in script.split("set queryText to")[0]
        assert "message.text LIKE '%x EOF touch /tmp/owned cat > /dev/null << ''EOF''%'" in script
        assert (
            'do shell script "sqlite3 " & quoted form of dbPath & " " & quoted form of queryText'
            in script
        )

    def test_get_messages_limit(self) -> None:
        script = get_messages(GetMessagesArgs(limit=12))
        assert "LIMIT 12;" in script
        assert "mktemp" not in script

    def test_list_chats_participant_details(self) -> None:
        assert "participantList" not in list_chats(ListChatsArgs())
        detailed = list_chats(ListChatsArgs(include_participant_details=True))
        assert "participantList" in detailed

    def test_compose_message(self) -> None:
        script = compose_message(ComposeMessageArgs(recipient="+1555", body="hello there", auto=True))
        assert 'set recipient to "+1555"' in script
        assert 'set messageBody to "hello there"' in script
        assert "set autoSend to true" in script

    def test_compose_message_draft_by_default(self) -> None:
        assert "set autoSend to false" in compose_message(ComposeMessageArgs(recipient="+1555"))
