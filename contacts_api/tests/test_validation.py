import unittest

from contacts_api.schemas import ContactPayload
from contacts_api.validation import (
    ContactValidationError,
    is_valid_phone_number,
    validate_contact_payload,
)


class PhoneNumberValidatorTests(unittest.TestCase):
    def test_accepts_valid_numbers(self):
        for value in ("+48123456789", "888-999-000", "+48 123 123 123", "601234567"):
            with self.subTest(value=value):
                self.assertTrue(is_valid_phone_number(value))

    def test_rejects_invalid_numbers(self):
        for value in ("", "abc", "123", "+48 1", "not a phone 555"):
            with self.subTest(value=value):
                self.assertFalse(is_valid_phone_number(value))

    def test_rejects_non_strings(self):
        self.assertFalse(is_valid_phone_number(None))
        self.assertFalse(is_valid_phone_number(48123456789))

    def test_region_applies_to_national_numbers(self):
        self.assertTrue(is_valid_phone_number("650-253-0000", region="US"))
        self.assertFalse(is_valid_phone_number("888-999-000", region="US"))


class ContactPayloadValidationTests(unittest.TestCase):
    def test_valid_payload_passes(self):
        validate_contact_payload(ContactPayload(name="Anna", phone="+48123456789"))

    def test_blank_name(self):
        with self.assertRaises(ContactValidationError) as ctx:
            validate_contact_payload(ContactPayload(name=" ", phone="+48123456789"))
        self.assertEqual(ctx.exception.field, "name")

    def test_empty_phone(self):
        with self.assertRaises(ContactValidationError) as ctx:
            validate_contact_payload(ContactPayload(name="Anna", phone=""))
        self.assertEqual(ctx.exception.field, "phone")
        self.assertEqual(str(ctx.exception), "phone: field is required")

    def test_invalid_phone(self):
        with self.assertRaises(ContactValidationError) as ctx:
            validate_contact_payload(ContactPayload(name="Anna", phone="abc"))
        self.assertEqual(ctx.exception.message, "invalid phone number")


if __name__ == "__main__":
    unittest.main()
