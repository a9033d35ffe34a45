"""Tests for the JSON wire contract of patch models."""

from __future__ import annotations

import json
from typing import Any

import pytest
from pydantic import ValidationError

from pyternary.codec import decode, encode
from pyternary.exceptions import DecodeError, EncodeError, RoutingError
from pyternary.models import (
    ABSENT,
    NULL,
    AbsentPolicy,
    NamedPersonEvent,
    PatchModel,
    PersonEvent,
    PersonMessage,
    TriState,
)


class Record(PatchModel):
    a: TriState[str] = ABSENT
    b: TriState[int] = ABSENT
    c: TriState[list[int]] = ABSENT


class Opaque(PatchModel):
    blob: TriState[Any] = ABSENT


def _encode_and_verify(record: Record, expected_json: str) -> None:
    assert encode(record) == expected_json
    assert decode(expected_json, Record) == record


# ------------------------------------------------------------------
# Field-level encoding
# ------------------------------------------------------------------


class TestRecordEncoding:
    def test_values(self) -> None:
        record = Record(a=TriState.of("Foo"), b=TriState.of(123), c=TriState.of([3, -5, 7]))
        _encode_and_verify(record, '{"a":"Foo","b":123,"c":[3,-5,7]}')

    def test_nulls(self) -> None:
        record = Record(a=NULL, b=NULL, c=NULL)
        _encode_and_verify(record, '{"a":null,"b":null,"c":null}')

    def test_absent_fields_are_omitted(self) -> None:
        record = Record(a=ABSENT, b=ABSENT, c=ABSENT)
        _encode_and_verify(record, "{}")

    def test_mixed(self) -> None:
        record = Record(a=TriState.of("x"), b=NULL)
        _encode_and_verify(record, '{"a":"x","b":null}')

    def test_python_dump_omits_absent(self) -> None:
        assert Record(b=NULL).model_dump() == {"b": None}

    def test_force_null_policy_emits_absent_as_null(self) -> None:
        text = encode(Record(a=TriState.of("x")), policy=AbsentPolicy.FORCE_NULL)
        assert text == '{"a":"x","b":null,"c":null}'
        # Forced encoding is lossy: absent fields come back as null.
        decoded = decode(text, Record)
        assert decoded.b == NULL
        assert decoded.c == NULL


class TestDefaults:
    def test_unset_fields_are_absent(self) -> None:
        record = Record()
        assert record == Record(a=ABSENT, b=ABSENT, c=ABSENT)
        assert record.absent_fields() == ("a", "b", "c")
        assert record.is_empty()

    def test_missing_key_decodes_as_absent(self) -> None:
        record = decode('{"b": 4}', Record)
        assert record.a.is_absent()
        assert record.b == TriState.of(4)
        assert record.c.is_absent()

    def test_present_null_decodes_as_null(self) -> None:
        assert decode('{"a": null}', Record).a.is_null()


class TestPythonConstruction:
    def test_bare_values_are_wrapped(self) -> None:
        event = PersonEvent(person_id=1, first_name="John", spouse_id=None)
        assert event.first_name == TriState.of("John")
        assert event.spouse_id == NULL
        assert event.family_name == ABSENT

    def test_tristate_payload_is_validated(self) -> None:
        with pytest.raises(ValidationError):
            PersonEvent(person_id=1, spouse_id=TriState.of("not-a-number"))

    def test_negative_entity_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PersonEvent(person_id=1, spouse_id=TriState.of(-2))

    def test_upsert_accepts_event_instance(self) -> None:
        event = PersonEvent(person_id=4, spouse_id=2)
        message = PersonMessage.upsert(event)
        assert message.payload == TriState.of(event)
        assert message.entity_id == 4

    def test_string_spouse_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PersonEvent(person_id=1, spouse_id="2")

    def test_frozen(self) -> None:
        event = PersonEvent(person_id=1)
        with pytest.raises(ValidationError):
            event.first_name = TriState.of("John")  # type: ignore[misc]


# ------------------------------------------------------------------
# Person messages (camelCase keys, nested omission)
# ------------------------------------------------------------------


class TestPersonMessages:
    def test_event_uses_camel_case_keys(self) -> None:
        event = PersonEvent(person_id=1, first_name=TriState.of("John"), family_name=TriState.of("Doe"))
        assert encode(event) == '{"personId":1,"firstName":"John","familyName":"Doe"}'

    def test_upsert_envelope_omits_nested_absent_fields(self) -> None:
        message = PersonMessage.upsert(PersonEvent(person_id=1, spouse_id=TriState.of(2)))
        assert json.loads(encode(message)) == {"personId": 1, "personData": {"personId": 1, "spouseId": 2}}

    def test_nested_null_is_kept(self) -> None:
        message = PersonMessage.upsert(PersonEvent(person_id=1, spouse_id=NULL))
        assert json.loads(encode(message)) == {"personId": 1, "personData": {"personId": 1, "spouseId": None}}

    def test_delete_envelope(self) -> None:
        assert encode(PersonMessage.delete(7)) == '{"personId":7,"personData":null}'

    def test_decode_upsert(self) -> None:
        message = decode('{"personId":2,"personData":{"personId":2,"familyName":"Doe","spouseId":1}}', PersonMessage)
        assert message.entity_id == 2
        assert message.is_upsert()
        event = message.payload.unwrap()
        assert event.first_name.is_absent()
        assert event.family_name == TriState.of("Doe")
        assert event.spouse_id == TriState.of(1)

    def test_decode_delete(self) -> None:
        message = decode('{"personId":7,"personData":null}', PersonMessage)
        assert message.payload.is_null()
        assert message.is_delete()

    def test_decode_missing_payload_is_absent(self) -> None:
        message = decode('{"personId":7}', PersonMessage)
        assert message.payload.is_absent()
        assert message.is_delete()

    def test_snake_case_keys_accepted(self) -> None:
        event = decode('{"person_id": 3, "first_name": "Ann"}', PersonEvent)
        assert event.first_name == TriState.of("Ann")

    def test_unknown_keys_ignored(self) -> None:
        event = decode('{"personId": 3, "nickname": "Annie"}', PersonEvent)
        assert event.is_empty()

    def test_envelope_without_payload_is_not_empty(self) -> None:
        # Applying it deletes the record.
        assert not decode('{"personId":1}', PersonMessage).is_empty()
        assert not PersonMessage.delete(1).is_empty()

    def test_plain_field_makes_patch_non_empty(self) -> None:
        assert NamedPersonEvent.plain_fields() == ("name",)
        assert not NamedPersonEvent(name="Johnny").is_empty()
        assert PersonEvent.plain_fields() == ()
        assert PersonEvent(person_id=1).is_empty()

    def test_tristate_fields(self) -> None:
        assert PersonEvent.tristate_fields() == ("first_name", "family_name", "spouse_id")
        assert PersonMessage.tristate_fields() == ("person_data",)


# ------------------------------------------------------------------
# Errors
# ------------------------------------------------------------------


class TestCodecErrors:
    def test_malformed_json(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode("{not json", PersonMessage)
        assert exc_info.value.message_type == "PersonMessage"
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_wrong_value_type(self) -> None:
        text = '{"personId":1,"personData":{"personId":1,"spouseId":"abc"}}'
        with pytest.raises(DecodeError) as exc_info:
            decode(text, PersonMessage)
        assert any("spouseId" in error["loc"] for error in exc_info.value.errors)

    def test_null_for_plain_field_rejected(self) -> None:
        with pytest.raises(DecodeError):
            decode('{"personId": null}', PersonMessage)

    def test_missing_id_rejected(self) -> None:
        with pytest.raises(DecodeError):
            decode('{"personData": null}', PersonMessage)

    @pytest.mark.parametrize("raw", ["true", "\"2\"", "2.0"])
    def test_spouse_id_must_be_an_integer(self, raw: str) -> None:
        text = f'{{"personId":1,"personData":{{"personId":1,"spouseId":{raw}}}}}'
        with pytest.raises(DecodeError) as exc_info:
            decode(text, PersonMessage)
        assert any("spouseId" in error["loc"] for error in exc_info.value.errors)

    @pytest.mark.parametrize("raw", ["1", "true"])
    def test_string_field_is_not_coerced(self, raw: str) -> None:
        with pytest.raises(DecodeError):
            decode(f'{{"personId":1,"firstName":{raw}}}', PersonEvent)

    def test_string_entity_id_rejected(self) -> None:
        with pytest.raises(DecodeError):
            decode('{"personId":"1","personData":null}', PersonMessage)

    def test_unserializable_value(self) -> None:
        with pytest.raises(EncodeError) as exc_info:
            encode(Opaque(blob=TriState.of(object())))
        assert exc_info.value.message_type == "Opaque"


# ------------------------------------------------------------------
# Routing
# ------------------------------------------------------------------


class TestRouting:
    def test_patch_without_id_field_has_no_entity_id(self) -> None:
        with pytest.raises(RoutingError, match="NamedPersonEvent"):
            NamedPersonEvent(name="x").entity_id  # noqa: B018

    def test_upsert_of_patch_without_id_field(self) -> None:
        with pytest.raises(RoutingError):
            PersonMessage.upsert(NamedPersonEvent(name="x"))  # type: ignore[arg-type]

    def test_person_event_entity_id(self) -> None:
        assert PersonEvent(person_id=9).entity_id == 9
