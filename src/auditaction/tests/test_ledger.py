import uuid
from datetime import timedelta

import pytest
from django.utils import timezone

from src.auditaction.models import AppendOnlyError, WalletAuditAction, WalletAuditEntry
from src.auditaction.selectors import wallet_audit_history
from src.auditaction.services import audit_value_text, wallet_audit_append
from src.core.exceptions import AuthenticationRequiredError, AuthorizationDeniedError

pytestmark = pytest.mark.django_db


@pytest.mark.parametrize(
    "value, text",
    [(True, "true"), (False, "false"), (None, None), ("0xabc", "0xabc")],
)
def test_audit_value_text(value, text):
    assert audit_value_text(value) == text


def test_append_records_entry(admin_profile, lawyer_profile):
    entry = wallet_audit_append(
        profile=lawyer_profile,
        action=WalletAuditAction.WALLET_VERIFIED,
        old_value=False,
        new_value=True,
        changed_by=admin_profile,
        reason="checked in person",
    )

    entry.refresh_from_db()
    assert entry.old_value == "false"
    assert entry.new_value == "true"
    assert entry.changed_by == admin_profile
    assert entry.reason == "checked in person"
    assert entry.changed_at is not None


def test_append_without_actor_is_system(lawyer_profile):
    entry = wallet_audit_append(profile=lawyer_profile, action=WalletAuditAction.WALLET_ADDED, new_value="0x1")
    assert entry.changed_by is None
    assert "system" in str(entry)


def test_entries_cannot_be_updated(lawyer_profile):
    entry = wallet_audit_append(profile=lawyer_profile, action=WalletAuditAction.WALLET_ADDED, new_value="0x1")
    entry.new_value = "0x2"

    with pytest.raises(AppendOnlyError):
        entry.save()

    entry.refresh_from_db()
    assert entry.new_value == "0x1"


def test_entries_cannot_be_deleted(lawyer_profile):
    entry = wallet_audit_append(profile=lawyer_profile, action=WalletAuditAction.WALLET_ADDED, new_value="0x1")

    with pytest.raises(AppendOnlyError):
        entry.delete()

    assert WalletAuditEntry.objects.filter(pk=entry.pk).exists()


def test_entries_go_with_their_profile(lawyer_profile):
    wallet_audit_append(profile=lawyer_profile, action=WalletAuditAction.WALLET_ADDED, new_value="0x1")

    lawyer_profile.delete()

    assert not WalletAuditEntry.objects.exists()


def test_actor_removal_keeps_entry(make_profile, lawyer_profile):
    actor = make_profile(role_category="admin")
    entry = wallet_audit_append(
        profile=lawyer_profile,
        action=WalletAuditAction.WALLET_ADDED,
        new_value="0x1",
        changed_by=actor,
    )

    actor.delete()

    entry.refresh_from_db()
    assert entry.changed_by is None


def test_history_newest_first(admin_profile, lawyer_profile):
    first = wallet_audit_append(profile=lawyer_profile, action=WalletAuditAction.WALLET_ADDED, new_value="0x1")
    second = wallet_audit_append(profile=lawyer_profile, action=WalletAuditAction.WALLET_UNVERIFIED)
    third = wallet_audit_append(profile=lawyer_profile, action=WalletAuditAction.WALLET_VERIFIED)
    wallet_audit_append(profile=admin_profile, action=WalletAuditAction.WALLET_ADDED, new_value="0x2")

    # same instant: insertion order decides
    instant = timezone.now()
    WalletAuditEntry.objects.filter(pk__in=[second.pk, third.pk]).update(changed_at=instant)
    WalletAuditEntry.objects.filter(pk=first.pk).update(changed_at=instant - timedelta(minutes=1))

    history = wallet_audit_history(actor=admin_profile, profile_id=lawyer_profile.id)

    assert [e.pk for e in history] == [third.pk, second.pk, first.pk]


def test_history_of_unknown_profile_is_empty(admin_profile):
    assert wallet_audit_history(actor=admin_profile, profile_id=uuid.uuid4()) == []
    assert wallet_audit_history(actor=admin_profile, profile_id="not-a-uuid") == []


def test_history_requires_admin_or_judiciary(judge_profile, lawyer_profile):
    assert wallet_audit_history(actor=judge_profile, profile_id=lawyer_profile.id) == []

    with pytest.raises(AuthorizationDeniedError):
        wallet_audit_history(actor=lawyer_profile, profile_id=lawyer_profile.id)

    with pytest.raises(AuthenticationRequiredError):
        wallet_audit_history(actor=None, profile_id=lawyer_profile.id)
