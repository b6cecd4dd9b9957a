"""Shared fixtures: a small knowledge base and a runner with a frozen clock."""

from datetime import datetime, timezone

import pytest

from support_stepper.domain.models import Article, Escalation, FallbackPath, Step
from support_stepper.execution.runner import StepRunner
from support_stepper.repositories.knowledge_base import InMemoryKnowledgeBase
from support_stepper.retrieval.keyword import KeywordArticleRetriever
from support_stepper.scanners.page_scanner import DisabledPageScanner
from support_stepper.services.support_session import SupportSession

FIXED_NOW = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def email_article():
    return Article(
        id="email",
        title="Email Not Sending",
        product="Outlook",
        summary="Messages stuck in the outbox.",
        tags=("email", "smtp"),
        steps=(
            Step(id="e1", text="Restart Outlook."),
            Step(id="e2", text="Check the Outbox.", expected_result="Outbox is empty."),
            Step(id="e3", text="Click Send/Receive.", say_to_customer="Please click Send/Receive."),
        ),
        fallbacks=(
            FallbackPath(
                id="fb-settings",
                condition="Still stuck after Send/Receive.",
                steps=(
                    Step(id="f1", text="Restart Outlook."),
                    Step(id="f2", text="Check the Outbox."),
                    Step(id="f3", text="Verify SMTP port 587."),
                    Step(id="f4", text="Click Send/Receive."),
                ),
            ),
            FallbackPath(
                id="fb-profile",
                condition="Profile is corrupt.",
                steps=(Step(id="p1", text="Create a new mail profile."),),
            ),
        ),
    )


@pytest.fixture
def printer_article():
    """Two steps, no fallbacks, always escalates to Tier2."""
    return Article(
        id="printer",
        title="Printer Offline",
        product="Office Printers",
        summary="Print jobs queue because the printer is offline.",
        tags=("printer",),
        steps=(
            Step(id="p_power", text="Power-cycle the printer."),
            Step(id="p_queue", text="Clear the print queue."),
        ),
        escalation=Escalation(when="always", target="Tier2"),
    )


@pytest.fixture
def vpn_article():
    return Article(
        id="vpn",
        title="VPN Will Not Connect",
        product="GlobalProtect",
        summary="The VPN client rejects the portal or times out.",
        tags=("vpn", "network"),
        keywords=("portal", "timeout", "gateway"),
        steps=(Step(id="v1", text="Check the portal address."),),
        fallbacks=(
            FallbackPath(
                id="fb-vpn-reinstall",
                condition="Client keeps failing.",
                steps=(
                    Step(id="v_re1", text="Power-cycle the printer."),
                    Step(id="v_re2", text="Reinstall the VPN client."),
                ),
            ),
        ),
    )


@pytest.fixture
def knowledge_base(email_article, printer_article, vpn_article):
    return InMemoryKnowledgeBase([email_article, printer_article, vpn_article])


@pytest.fixture
def retriever(knowledge_base):
    return KeywordArticleRetriever(knowledge_base)


@pytest.fixture
def runner():
    return StepRunner(clock=fixed_clock)


@pytest.fixture
def session(knowledge_base, retriever, runner):
    return SupportSession(
        session_id="test-session",
        knowledge_base=knowledge_base,
        retriever=retriever,
        scanner=DisabledPageScanner(),
        runner=runner,
    )
