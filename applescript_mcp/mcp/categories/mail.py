"""
Mail.app operations.

The listing and search scripts share one mailbox lookup strategy:

1. When an account is named and exists, look for the mailbox in that account
   (falling back to the account's inbox for listings).
2. Otherwise search every mailbox, then the iCloud account, then the rest.
3. Listings that still found nothing merge all inboxes, newest first.

Each script starts with a block of ``set`` statements carrying the escaped
arguments, followed by a fixed body.
"""
from __future__ import annotations

from pydantic import Field

from applescript_mcp.core.applescript import boolean, escape_string, quote
from applescript_mcp.mcp.registry import ScriptCategory, ScriptDefinition
from applescript_mcp.models.base import CamelModel

ACCOUNT_DESCRIPTION = (
    "Name of the account to search in (e.g., 'iCloud', 'Gmail', 'Exchange'). "
    "If not specified, searches all accounts with preference for iCloud."
)


class CreateEmailArgs(CamelModel):
    recipient: str = Field(..., description="Email recipient")
    subject: str = Field(..., description="Email subject")
    body: str = Field(..., description="Email body")


class ListEmailsArgs(CamelModel):
    mailbox: str = Field(
        "Inbox", description="Name of the mailbox to list emails from (e.g., 'Inbox', 'Sent')"
    )
    account: str | None = Field(None, description=ACCOUNT_DESCRIPTION)
    count: int = Field(10, ge=1, description="Maximum number of emails to retrieve")
    unread_only: bool = Field(False, description="Only show unread emails if true")


class GetEmailArgs(CamelModel):
    mailbox: str = Field(
        "Inbox", description="Name of the mailbox to search in (e.g., 'Inbox', 'Sent')"
    )
    account: str | None = Field(None, description=ACCOUNT_DESCRIPTION)
    subject: str | None = Field(None, description="Subject text to search for (partial match)")
    sender: str | None = Field(None, description="Sender email or name to search for (partial match)")
    date_received: str | None = Field(
        None, description="Date received to search for (format: YYYY-MM-DD)"
    )
    unread_only: bool = Field(False, description="Only search unread emails if true")
    include_body: bool = Field(False, description="Include email body in the result if true")


URL_ENCODE_HANDLER = """
on urlEncode(theText)
  set theEncodedText to ""
  set theChars to every character of theText
  repeat with aChar in theChars
    set charCode to ASCII number aChar
    if charCode = 32 then
      set theEncodedText to theEncodedText & "%20"
    else if (charCode ≥ 48 and charCode ≤ 57) or (charCode ≥ 65 and charCode ≤ 90) or (charCode ≥ 97 and charCode ≤ 122) or charCode = 45 or charCode = 46 or charCode = 95 or charCode = 126 then
      set theEncodedText to theEncodedText & aChar
    else
      set hexCode to do shell script "printf '%02X' " & charCode
      set theEncodedText to theEncodedText & "%" & hexCode
    end if
  end repeat
  return theEncodedText
end urlEncode
"""


def create_email(args: CreateEmailArgs) -> str:
    return f"""
set recipient to {quote(args.recipient)}
set subject to {quote(args.subject)}
set body to {quote(args.body)}

set encodedSubject to my urlEncode(subject)
set encodedBody to my urlEncode(body)

set mailtoURL to "mailto:" & recipient & "?subject=" & encodedSubject & "&body=" & encodedBody

tell application "Mail"
  mailto mailtoURL
  activate
end tell
""" + URL_ENCODE_HANDLER


# Shared handlers: message selection and newest-first ordering.
MAILBOX_HANDLERS = """
on messagesOf(targetMailbox, showUnreadOnly)
  tell application "Mail"
    if showUnreadOnly then
      return (messages of targetMailbox whose read status is false)
    end if
    return (messages of targetMailbox)
  end tell
end messagesOf

on findNamedMailbox(mailboxList, mailboxName)
  tell application "Mail"
    repeat with m in mailboxList
      if name of m is mailboxName then return contents of m
    end repeat
  end tell
  return missing value
end findNamedMailbox

on sortMessagesByDate(messageList)
  tell application "Mail"
    set sortedMessages to {}
    repeat with i from 1 to count of messageList
      set currentMsg to item i of messageList
      set currentDate to date received of currentMsg
      set inserted to false
      if (count of sortedMessages) is 0 then
        set sortedMessages to {currentMsg}
      else
        repeat with j from 1 to count of sortedMessages
          set compareMsg to item j of sortedMessages
          set compareDate to date received of compareMsg
          if currentDate > compareDate then
            if j is 1 then
              set sortedMessages to {currentMsg} & sortedMessages
            else
              set sortedMessages to (items 1 thru (j - 1) of sortedMessages) & currentMsg & (items j thru (count of sortedMessages) of sortedMessages)
            end if
            set inserted to true
            exit repeat
          end if
        end repeat
        if not inserted then
          set sortedMessages to sortedMessages & {currentMsg}
        end if
      end if
    end repeat
    return sortedMessages
  end tell
end sortMessagesByDate

on padNumber(num)
  if num < 10 then
    return "0" & num
  else
    return num as string
  end if
end padNumber
"""

# Resolves ``targetAccount``, ``foundMailbox`` and ``emailMessages``.
MAILBOX_LOOKUP = """
  set foundMailbox to false
  set emailMessages to {}
  set targetAccount to missing value

  if not searchAllAccounts then
    try
      repeat with acct in (every account)
        if name of acct is accountName then
          set targetAccount to contents of acct
          exit repeat
        end if
      end repeat
    end try
    if targetAccount is missing value then
      set searchAllAccounts to true
    end if
  end if

  if not searchAllAccounts then
    try
      set targetMailbox to my findNamedMailbox(every mailbox of targetAccount, mailboxName)
      if targetMailbox is missing value and fallBackToInbox then
        set targetMailbox to inbox of targetAccount
      end if
      if targetMailbox is not missing value then
        set foundMailbox to true
        set emailMessages to my messagesOf(targetMailbox, showUnreadOnly)
      end if
    end try
  else
    set iCloudAccount to missing value
    set allAccounts to every account
    repeat with acct in allAccounts
      if name of acct is "iCloud" then
        set iCloudAccount to contents of acct
        exit repeat
      end if
    end repeat

    try
      set targetMailbox to my findNamedMailbox(every mailbox, mailboxName)
      if targetMailbox is not missing value then
        set foundMailbox to true
        set emailMessages to my messagesOf(targetMailbox, showUnreadOnly)
      end if
    end try

    if searchOtherAccounts and not foundMailbox and iCloudAccount is not missing value then
      try
        set targetMailbox to my findNamedMailbox(every mailbox of iCloudAccount, mailboxName)
        if targetMailbox is not missing value then
          set foundMailbox to true
          set emailMessages to my messagesOf(targetMailbox, showUnreadOnly)
        end if
      end try
    end if

    if searchOtherAccounts and not foundMailbox then
      repeat with acct in allAccounts
        if contents of acct is not iCloudAccount then
          try
            set targetMailbox to my findNamedMailbox(every mailbox of acct, mailboxName)
            if targetMailbox is not missing value then
              set foundMailbox to true
              set emailMessages to my messagesOf(targetMailbox, showUnreadOnly)
              exit repeat
            end if
          end try
        end if
      end repeat
    end if
  end if
"""

MESSAGE_SUMMARY = """
        set msgSubject to subject of theMessage
        set msgSender to sender of theMessage
        set msgDate to date received of theMessage
        set msgRead to read status of theMessage

        set msgAccount to ""
        try
          set msgAcct to account of (mailbox of theMessage)
          set msgAccount to " [" & name of msgAcct & "]"
        end try

        set emailList to emailList & "From: " & msgSender & return
        set emailList to emailList & "Subject: " & msgSubject & return
        set emailList to emailList & "Date: " & msgDate & msgAccount & return
        set emailList to emailList & "Read: " & msgRead & return
"""

LIST_EMAILS_BODY = """
tell application "Mail"
""" + MAILBOX_LOOKUP + """
  if not foundMailbox then
    set emailMessages to {}
    set allAccounts to every account
    set accountsChecked to 0

    repeat with acct in allAccounts
      if name of acct is "iCloud" then
        try
          set emailMessages to emailMessages & my messagesOf(inbox of acct, showUnreadOnly)
          set accountsChecked to accountsChecked + 1
        end try
        exit repeat
      end if
    end repeat

    if accountsChecked is 0 then
      repeat with acct in allAccounts
        try
          set emailMessages to emailMessages & my messagesOf(inbox of acct, showUnreadOnly)
        end try
      end repeat
    end if

    set emailMessages to my sortMessagesByDate(emailMessages)
    set mailboxName to "All Inboxes"
  end if

  if (count of emailMessages) > messageCount then
    set emailMessages to items 1 thru messageCount of emailMessages
  end if

  set accountInfo to ""
  if not searchAllAccounts and targetAccount is not missing value then
    set accountInfo to " (" & accountName & ")"
  end if

  set emailList to "Recent emails in " & mailboxName & accountInfo & ":" & return & return

  if (count of emailMessages) is 0 then
    set emailList to emailList & "No messages found."
  else
    repeat with theMessage in emailMessages
      try
""" + MESSAGE_SUMMARY + """
        set emailList to emailList & return
      on error errMsg
        set emailList to emailList & "Error processing message: " & errMsg & return & return
      end try
    end repeat
  end if

  return emailList
end tell
""" + MAILBOX_HANDLERS

GET_EMAIL_BODY = """
tell application "Mail"
""" + MAILBOX_LOOKUP + """
  set filteredMessages to {}

  repeat with theMessage in emailMessages
    try
      set matchesSubject to true
      set matchesSender to true
      set matchesDate to true

      if searchSubject is not "" then
        if (subject of theMessage) does not contain searchSubject then
          set matchesSubject to false
        end if
      end if

      if searchSender is not "" then
        if (sender of theMessage) does not contain searchSender then
          set matchesSender to false
        end if
      end if

      if searchDate is not "" then
        set msgDate to date received of theMessage
        set msgDateString to (year of msgDate as string) & "-" & my padNumber(month of msgDate as integer) & "-" & my padNumber(day of msgDate as integer)
        if msgDateString is not searchDate then
          set matchesDate to false
        end if
      end if

      if matchesSubject and matchesSender and matchesDate then
        set end of filteredMessages to theMessage
      end if
    end try
  end repeat

  set emailList to "Search results:" & return & return

  if (count of filteredMessages) is 0 then
    set emailList to emailList & "No matching emails found."
  else
    repeat with theMessage in filteredMessages
      try
""" + MESSAGE_SUMMARY + """
        if includeBody then
          set msgContent to content of theMessage
          set emailList to emailList & "Content: " & return & msgContent & return
        end if

        set emailList to emailList & return
      on error errMsg
        set emailList to emailList & "Error processing message: " & errMsg & return & return
      end try
    end repeat
  end if

  return emailList
end tell
""" + MAILBOX_HANDLERS


def list_emails(args: ListEmailsArgs) -> str:
    return f"""
set mailboxName to {quote(args.mailbox or "Inbox")}
set accountName to {quote(args.account or "iCloud")}
set messageCount to {args.count}
set showUnreadOnly to {boolean(args.unread_only)}
set searchAllAccounts to {boolean(not args.account)}
set fallBackToInbox to true
set searchOtherAccounts to true
""" + LIST_EMAILS_BODY


def get_email(args: GetEmailArgs) -> str:
    return f"""
set mailboxName to {quote(args.mailbox or "Inbox")}
set accountName to {quote(args.account or "iCloud")}
set searchSubject to "{escape_string(args.subject)}"
set searchSender to "{escape_string(args.sender)}"
set searchDate to "{escape_string(args.date_received)}"
set showUnreadOnly to {boolean(args.unread_only)}
set includeBody to {boolean(args.include_body)}
set searchAllAccounts to {boolean(not args.account)}
set fallBackToInbox to false
set searchOtherAccounts to false
""" + GET_EMAIL_BODY


MAIL_CATEGORY = ScriptCategory(
    name="mail",
    description="Mail operations",
    scripts=(
        ScriptDefinition("create_email", "Create a new email in Mail.app", create_email, CreateEmailArgs),
        ScriptDefinition(
            "list_emails",
            "List emails from a specified mailbox in Mail.app",
            list_emails,
            ListEmailsArgs,
        ),
        ScriptDefinition(
            "get_email",
            "Get a specific email by search criteria from Mail.app",
            get_email,
            GetEmailArgs,
        ),
    ),
)
