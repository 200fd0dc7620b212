"""
Tests for contact and organization request models.
"""

import pytest
from pydantic import ValidationError

from src.domains.contacts.models import ContactCreate, ContactUpdate
from src.domains.organizations.models import OrganizationCreate, OrganizationUpdate


class TestContactCreate:
    def test_names_and_tags_cleaned(self):
        contact = ContactCreate(
            firstName="  Ada ", lastName="Lovelace", tags=[" vip", "vip", " "]
        )

        assert contact.firstName == "Ada"
        assert contact.tags == ["vip"]

    def test_malformed_email_rejected(self):
        with pytest.raises(ValidationError):
            ContactCreate(firstName="Ada", lastName="Lovelace", email="ada@")

    def test_email_optional(self):
        assert ContactCreate(firstName="Ada", lastName="Lovelace").email is None


class TestContactUpdate:
    def test_names_are_trimmed(self):
        update = ContactUpdate(firstName="  Grace ")

        assert update.firstName == "Grace"

    @pytest.mark.parametrize("field", ["firstName", "lastName"])
    def test_blank_name_rejected(self, field: str):
        with pytest.raises(ValidationError):
            ContactUpdate(**{field: "   "})

    def test_unset_names_stay_unset(self):
        update = ContactUpdate(notes="Met at the conference")

        assert update.model_dump(exclude_unset=True) == {
            "notes": "Met at the conference"
        }

    def test_malformed_email_rejected(self):
        with pytest.raises(ValidationError):
            ContactUpdate(email="a b@.com")


class TestOrganizationEmail:
    def test_create_accepts_valid_email(self):
        organization = OrganizationCreate(name="Acme Corp", email="hello@acme.com")

        assert organization.email == "hello@acme.com"

    def test_create_rejects_malformed_email(self):
        with pytest.raises(ValidationError):
            OrganizationCreate(name="Acme Corp", email="acme")

    def test_update_rejects_malformed_email(self):
        with pytest.raises(ValidationError):
            OrganizationUpdate(email="a b@.com")
