from dataclasses import replace

from support_stepper.domain.models import Article, Escalation, FallbackPath, Step

# ==============================================================================
# SHARED STEPS
# ==============================================================================
# Fallback paths repeat some main-path steps (same text, own ids). When the agent has
# already done them, the runner skips them on switch.

restart_outlook = Step(
    id="restart_outlook",
    text="Ask the customer to fully close Outlook and open it again.",
    expected_result="Outlook opens without an error banner.",
    say_to_customer="Could you close Outlook completely and open it again for me?",
)

check_outbox = Step(
    id="check_outbox",
    text="Open the Outbox folder and check whether the message is stuck there.",
    expected_result="The Outbox is empty or shows the stuck message.",
    say_to_customer="Please open your Outbox folder. Do you see the email sitting there?",
)

# ==============================================================================
# ARTICLE 1: EMAIL NOT SENDING
# ==============================================================================

email_not_sending = Article(
    id="kb-001",
    title="Email Not Sending",
    product="Outlook",
    summary="Messages stay in the Outbox or fail with an SMTP error when sending.",
    tags=("email", "smtp"),
    keywords=("outbox", "send", "smtp", "stuck"),
    prechecks=(
        "Confirm the customer is online.",
        "Confirm the mailbox is not over quota.",
    ),
    steps=(
        restart_outlook,
        check_outbox,
        Step(
            id="resend",
            text="Select the stuck message and choose Send/Receive All Folders.",
            expected_result="The message leaves the Outbox.",
            say_to_customer="Now click Send/Receive, then Send/Receive All Folders.",
        ),
    ),
    fallbacks=(
        FallbackPath(
            id="fb-smtp-settings",
            condition="The message is still stuck after Send/Receive.",
            steps=(
                replace(restart_outlook, id="fb_restart_outlook"),
                replace(check_outbox, id="fb_check_outbox"),
                Step(
                    id="smtp_port",
                    text="Open Account Settings and verify the outgoing server uses port 587 with STARTTLS.",
                    expected_result="Outgoing server settings match the company standard.",
                ),
                Step(
                    id="smtp_auth",
                    text="Enable 'My outgoing server requires authentication'.",
                ),
            ),
        ),
    ),
    escalation=Escalation(when="SMTP settings are correct and mail still fails", target="Messaging Tier 2"),
)

# ==============================================================================
# ARTICLE 2: VPN WILL NOT CONNECT
# ==============================================================================

vpn_connect = Article(
    id="kb-002",
    title="VPN Will Not Connect",
    product="GlobalProtect",
    summary="The VPN client hangs on connecting or rejects the portal address.",
    tags=("vpn", "remote access", "network"),
    keywords=("portal", "connect", "gateway", "tunnel"),
    prechecks=("Confirm the customer has a working internet connection.",),
    steps=(
        Step(
            id="vpn_portal",
            text="Check the portal address in the VPN client matches the published address.",
            say_to_customer="Can you read me the address shown in the Portal box?",
        ),
        Step(
            id="vpn_reconnect",
            text="Disconnect, wait ten seconds, and connect again.",
            expected_result="The client shows Connected.",
        ),
    ),
    fallbacks=(
        FallbackPath(
            id="fb-vpn-reinstall",
            condition="The client keeps failing with a valid portal address.",
            steps=(
                Step(id="vpn_uninstall", text="Uninstall the VPN client from Settings > Apps."),
                Step(id="vpn_install", text="Install the current client from the self-service portal."),
                Step(
                    id="vpn_reconnect_after_install",
                    text="Disconnect, wait ten seconds, and connect again.",
                    expected_result="The client shows Connected.",
                ),
            ),
        ),
    ),
    escalation=Escalation(when="Reinstall did not help", target="Network Operations"),
)

# ==============================================================================
# ARTICLE 3: PASSWORD RESET
# ==============================================================================

password_reset = Article(
    id="kb-003",
    title="Reset a Forgotten Password",
    product="Active Directory",
    summary="Customer is locked out or has forgotten their network password.",
    tags=("password", "account", "locked"),
    keywords=("password", "login", "sign", "locked", "permission", "access"),
    steps=(
        Step(
            id="verify_identity",
            text="Verify the customer's identity with two security questions.",
            expected_result="Identity confirmed.",
        ),
        Step(
            id="issue_temp_password",
            text="Issue a temporary password from the admin console and tick 'must change at next logon'.",
            say_to_customer="I've set a temporary password. You'll be asked to change it when you sign in.",
        ),
    ),
    fallbacks=(
        FallbackPath(
            id="fb-unlock-account",
            condition="The account is locked rather than the password forgotten.",
            steps=(
                Step(id="unlock_account", text="Unlock the account from the admin console."),
                Step(id="confirm_login", text="Ask the customer to sign in again."),
            ),
        ),
    ),
)

# ==============================================================================
# ARTICLE 4: PRINTER OFFLINE (no fallbacks)
# ==============================================================================

printer_offline = Article(
    id="kb-004",
    title="Printer Shows Offline",
    product="Office Printers",
    summary="Print jobs queue up because the printer is reported as offline.",
    tags=("printer", "print queue"),
    keywords=("printer", "queue", "offline", "spooler"),
    steps=(
        Step(id="printer_power", text="Ask the customer to power-cycle the printer."),
        Step(id="clear_queue", text="Clear the print queue and send a test page."),
    ),
    escalation=Escalation(when="always", target="Desktop Support"),
)

# Knowledge-base order is significant: retrieval ties keep this order.
BUNDLED_ARTICLES = [
    email_not_sending,
    vpn_connect,
    password_reset,
    printer_offline,
]
