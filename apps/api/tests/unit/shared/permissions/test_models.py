"""
Tests for shared permissions models (actions, share permissions, decisions).
"""

import pytest
from prisma.enums import ResourceType, SharePermission

from src.shared.permissions.models import (
    OWNER_ACTIONS,
    RESOURCE_MODELS,
    AccessDecision,
    Action,
    allowed_actions,
    normalize_share_permission,
)


class TestAllowedActions:
    """Test the allowed_actions mapping."""

    def test_owner_has_every_action(self):
        assert allowed_actions(True, None) == set(Action)

    def test_owner_actions_ignore_any_grant(self):
        """An owner keeps full rights even if a stray grant is passed."""
        assert allowed_actions(True, SharePermission.view) == OWNER_ACTIONS

    def test_view_grant_allows_read_only(self):
        assert allowed_actions(False, SharePermission.view) == {Action.READ}

    def test_edit_grant_allows_read_and_write(self):
        assert allowed_actions(False, SharePermission.edit) == {
            Action.READ,
            Action.WRITE,
        }

    def test_no_relationship_allows_nothing(self):
        assert allowed_actions(False, None) == set()

    @pytest.mark.parametrize("permission", list(SharePermission))
    def test_grants_never_allow_delete_or_share(self, permission):
        actions = allowed_actions(False, permission)

        assert Action.DELETE not in actions
        assert Action.SHARE not in actions

    def test_edit_is_superset_of_view(self):
        assert allowed_actions(False, SharePermission.view) <= allowed_actions(
            False, SharePermission.edit
        )


class TestNormalizeSharePermission:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("view", "view"),
            ("edit", "edit"),
            ("read", "view"),
            ("write", "edit"),
            ("READ", "view"),
            ("Edit", "edit"),
        ],
    )
    def test_maps_legacy_spellings(self, value, expected):
        assert normalize_share_permission(value) == expected

    def test_passes_enum_members_through(self):
        assert normalize_share_permission(SharePermission.edit) is SharePermission.edit

    def test_leaves_unknown_values_for_validation(self):
        assert normalize_share_permission("admin") == "admin"


class TestAccessDecision:
    def test_owner_decision(self):
        decision = AccessDecision(
            resource=object(), resource_type=ResourceType.contact, is_owner=True
        )

        assert decision.can_read is True
        assert decision.can_write is True
        assert decision.can_delete is True
        assert decision.allows(Action.SHARE) is True
        assert decision.is_shared_with_me is False
        assert decision.permission is None

    def test_view_grantee_decision(self):
        decision = AccessDecision(
            resource=object(),
            resource_type=ResourceType.deal,
            is_owner=False,
            permission=SharePermission.view,
        )

        assert decision.can_read is True
        assert decision.can_write is False
        assert decision.can_delete is False
        assert decision.is_shared_with_me is True

    def test_edit_grantee_decision(self):
        decision = AccessDecision(
            resource=object(),
            resource_type=ResourceType.activity,
            is_owner=False,
            permission=SharePermission.edit,
        )

        assert decision.can_write is True
        assert decision.can_delete is False
        assert decision.allows(Action.SHARE) is False


class TestResourceModels:
    def test_every_resource_type_is_registered(self):
        assert set(RESOURCE_MODELS) == set(ResourceType)

    @pytest.mark.parametrize(
        "resource_type,client_attr,share_field",
        [
            (ResourceType.contact, "contact", "contactId"),
            (ResourceType.deal, "deal", "dealId"),
            (ResourceType.activity, "activity", "activityId"),
        ],
    )
    def test_resource_model_fields(self, resource_type, client_attr, share_field):
        model = RESOURCE_MODELS[resource_type]

        assert model.client_attr == client_attr
        assert model.share_field == share_field
