import pytest

from live_validate import (
    InputValidator,
    InvalidArgumentException,
    InvalidRuleResultException,
    MissingScopeException,
    ValidatorRule,
)

from conftest import required


class MinLength(ValidatorRule):
    def __init__(self, length: int):
        self.length = length

    def validate(self, value):
        if value is not None and len(value) < self.length:
            return f"Must be at least {self.length} characters"
        return None


def test_requires_a_scope():
    with pytest.raises(MissingScopeException):
        InputValidator(None)


def test_rejects_something_that_is_not_a_scope():
    with pytest.raises(InvalidArgumentException):
        InputValidator(object())


def test_default_priority(session):
    assert InputValidator(session).priority == 1000
    assert InputValidator(session, priority=5).priority == 5


def test_add_rule_is_chainable(session):
    validator = InputValidator(session)
    assert validator.add_rule("name", required).add_rule("email", required) is validator


def test_no_rules_means_valid(session):
    validator = InputValidator(session)
    assert validator.validate() == {}
    assert validator.is_valid()


def test_rule_receives_current_value(session, sample_data):
    seen = []
    validator = InputValidator(session)
    validator.add_rule("name", lambda value: seen.append(value))

    session.set_input("name", sample_data["name"])
    validator.validate()

    assert seen == [sample_data["name"]]


def test_unset_field_is_validated_as_none(session):
    validator = InputValidator(session).add_rule("name", required)
    assert validator.validate() == {"name": "This field is required"}


def test_first_failing_rule_short_circuits_the_chain(session):
    calls = {"second": 0}

    def second(value):
        calls["second"] += 1
        return "second failed"

    validator = InputValidator(session)
    validator.add_rule("name", required)
    validator.add_rule("name", second)

    assert validator.validate() == {"name": "This field is required"}
    assert calls["second"] == 0

    session.set_input("name", "Ann")
    assert validator.validate() == {"name": "second failed"}
    assert calls["second"] == 1


def test_passing_chain_reports_none(session):
    validator = InputValidator(session)
    validator.add_rule("name", required)
    validator.add_rule("name", MinLength(2))
    session.set_input("name", "Ann")

    assert validator.validate() == {"name": None}
    assert validator.is_valid()


def test_extra_arguments_are_bound_at_registration(session):
    def between(value, low, high, *, message):
        if value is None or not (low <= value <= high):
            return message
        return None

    validator = InputValidator(session)
    validator.add_rule("age", between, 18, 99, message="Age must be between 18 and 99")

    session.set_input("age", 12)
    assert validator.validate() == {"age": "Age must be between 18 and 99"}

    session.set_input("age", 30)
    assert validator.validate() == {"age": None}


def test_none_rule_always_passes(session):
    validator = InputValidator(session).add_rule("nickname", None)
    assert validator.validate() == {"nickname": None}


def test_validator_rule_class(session):
    validator = InputValidator(session).add_rule("password", MinLength(8))
    session.set_input("password", "short")
    assert validator.validate() == {"password": "Must be at least 8 characters"}


def test_non_callable_rule_is_rejected(session):
    with pytest.raises(InvalidArgumentException):
        InputValidator(session).add_rule("name", "required")


@pytest.mark.parametrize("bad_result", [False, 0, ["a", "b"], {"message": "x"}])
def test_malformed_rule_result_raises(session, bad_result):
    validator = InputValidator(session).add_rule("name", lambda value: bad_result)

    with pytest.raises(InvalidRuleResultException) as exc_info:
        validator.validate()

    assert exc_info.value.input_id == "name"
    assert exc_info.value.result == bad_result


def test_rule_exceptions_propagate(session):
    def broken(value):
        raise ZeroDivisionError("boom")

    validator = InputValidator(session).add_rule("name", broken)

    with pytest.raises(ZeroDivisionError):
        validator.validate()
    with pytest.raises(ZeroDivisionError):
        validator.is_valid()


def test_fields_are_namespace_qualified(session):
    form = session.module("signup")
    validator = InputValidator(form)
    validator.add_rule("name", required)
    validator.add_rule("name", MinLength(2))
    validator.add_rule("email", required)

    assert validator.fields() == ["signup-name", "signup-email"]

    form.set_input("name", "Ann")
    assert validator.validate() == {"signup-email": "This field is required", "signup-name": None}


def test_rule_scope_overrides_validator_scope(session):
    address = session.module("address")
    validator = InputValidator(session)
    validator.add_rule("name", required)
    validator.add_rule("name", required, scope=address)

    session.set_input("name", "Ann")

    assert validator.validate() == {"address-name": "This field is required", "name": None}


def test_chains_sharing_a_key_keep_registration_order(session):
    sub = session.module("sub")
    calls = []

    def first(value):
        calls.append("first")
        return None

    def second(value):
        calls.append("second")
        return "second failed"

    def third(value):
        calls.append("third")
        return "third failed"

    validator = InputValidator(session)
    validator.add_rule("x", first, scope=sub)
    validator.add_rule("sub-x", second)
    validator.add_rule("x", third, scope=sub)

    assert validator.fields() == ["sub-x"]
    assert validator.validate() == {"sub-x": "second failed"}
    assert calls == ["first", "second"]


def test_init_message_sent_once_per_session(session):
    InputValidator(session)
    InputValidator(session)
    InputValidator(session.module("nested"))

    assert session.messages_of_type("validation-init") == [{"feedback_message_type": "validation_feedback"}]


def test_condition_getter_and_setter(session):
    validator = InputValidator(session)
    assert validator.condition() is None

    def always():
        return True

    assert validator.condition(always) is validator
    assert validator.condition() is always

    validator.condition(None)
    assert validator.condition() is None


def test_false_condition_skips_rules(session):
    calls = {"count": 0}

    def counting(value):
        calls["count"] += 1
        return "failed"

    validator = InputValidator(session).add_rule("name", counting)
    validator.condition(lambda: False)

    assert validator.validate() == {"name": None}
    assert validator.is_valid()
    assert calls["count"] == 0

    validator.condition(None)
    assert validator.validate() == {"name": "failed"}
    assert calls["count"] == 1


def test_condition_must_be_exactly_true(session):
    validator = InputValidator(session).add_rule("name", required)

    validator.condition(lambda: 1)
    assert validator.is_valid()

    validator.condition(lambda: True)
    assert not validator.is_valid()


def test_condition_reads_reactive_inputs(session):
    validator = InputValidator(session).add_rule("company", required)
    validator.condition(lambda: session.get_input("employed") is True)

    assert validator.is_valid()

    session.set_input("employed", True)
    assert validator.validate() == {"company": "This field is required"}


def test_one_argument_condition_ignores_its_argument(session):
    validator = InputValidator(session).add_rule("name", required)

    validator.condition(lambda _: False)
    assert validator.is_valid()

    validator.condition(lambda _: True)
    assert not validator.is_valid()


@pytest.mark.parametrize("cond", ["yes", 1, lambda a, b: True])
def test_invalid_condition_is_rejected(session, cond):
    with pytest.raises(InvalidArgumentException):
        InputValidator(session).condition(cond)


def test_condition_getter_returns_what_was_set(session):
    validator = InputValidator(session).add_rule("name", lambda value: "failed")

    def skip(_):
        return False

    validator.condition(skip)

    assert validator.condition() is skip
    assert validator.is_valid()
