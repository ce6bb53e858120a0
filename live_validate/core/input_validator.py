from __future__ import annotations

import inspect
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

from live_validate.config import INITIALIZED_KEY_NAME, get_default_priority, get_init_message_type
from live_validate.contracts.reactive_scope import ObserverHandle, ReactiveScope
from live_validate.contracts.validator_rule import Rule
from live_validate.core.feedback import ValidationFeedback, send_feedback
from live_validate.core.merge import ValidationResults, merge_results
from live_validate.core.user_data import define_key
from live_validate.exceptions import (
    InvalidArgumentException,
    InvalidRuleResultException,
    MissingScopeException,
    ValidatorAlreadyAttachedException,
    ValidatorCycleException,
)

logger = logging.getLogger(__name__)

Condition = Callable[..., Any]

VALIDATOR_INITIALIZED = define_key[bool](INITIALIZED_KEY_NAME, False)

_MISSING: Any = object()


@dataclass(frozen=True, eq=False)
class RuleEntry:
    """One registered rule: the field it targets and the scope the field lives in."""

    input_id: str
    rule: Callable[[Any], Optional[str]]
    scope: ReactiveScope

    @property
    def key(self) -> str:
        return self.scope.ns(self.input_id)

    def apply(self) -> Optional[str]:
        result = self.rule(self.scope.get_input(self.input_id))
        if result is not None and not isinstance(result, str):
            raise InvalidRuleResultException(self.input_id, result)
        return result


def _always_pass(value: Any, *args: Any, **kwargs: Any) -> None:
    return None


def _required_positional_count(fn: Callable[..., Any]) -> int:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # Builtins without a signature are treated as zero-argument callables
        return 0
    return sum(
        1
        for param in signature.parameters.values()
        if param.default is param.empty
        and param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD)
    )


def _check_condition(cond: Any) -> Optional[Condition]:
    if cond is None:
        return None
    if not callable(cond):
        raise InvalidArgumentException("condition", "cond", "None or a callable")
    if _required_positional_count(cond) <= 1:
        return cond
    raise InvalidArgumentException("condition", "cond", "a callable with at most one argument")


def _evaluate_condition(cond: Condition) -> Any:
    # Expression-style predicates take a placeholder argument they ignore
    if _required_positional_count(cond) == 1:
        return cond(None)
    return cond()


class InputValidator:
    """
    Realtime validation for the fields of a reactive form.

    An `InputValidator` is created inside a session (or a module scope of
    one) and populated with rules via `add_rule()`. Each field can have any
    number of rules; they run in registration order and the first failing
    rule's message is the field's result.

    Once populated, a validator is used in three ways:

    1. `enable()` pushes live feedback to the UI layer, re-running validation
       whenever a field (or anything else the rules read) changes.
    2. `is_valid()` returns True only if every rule passes; check it before
       running actions that depend on valid input.
    3. `validate()` returns the raw result set: fully-qualified field key ->
       None (passing) or the error message.

    Validators nest: a sub-form can build its own validator and hand it to the
    parent form's validator with `add_validator()`. Only the root of such a
    tree drives feedback.

    Usage:
        validator = InputValidator(session)
        validator.add_rule("name", required)
        validator.add_rule("email", lambda value: None if "@" in value else "Please provide a valid email")
        validator.enable()
    """

    def __init__(self, scope: Optional[ReactiveScope], priority: Optional[int] = None):
        """
        Args:
            scope: The session (or module scope) the validator belongs to.
            priority: Priority of the live feedback observer. Keep it higher than
                the priorities of observers that do real work, so users see
                validation updates first. Defaults to `VALIDATOR_PRIORITY` (1000).
        """
        if scope is None:
            raise MissingScopeException()
        if not isinstance(scope, ReactiveScope):
            raise InvalidArgumentException("InputValidator", "scope", "ReactiveScope object")

        self._scope = scope
        self._priority = priority if priority is not None else get_default_priority()
        self._enabled = False
        self._is_child = False
        self._parent: Optional[InputValidator] = None
        self._observer_handle: Optional[ObserverHandle] = None
        self._condition = scope.reactive_value(None, label="validator_condition")
        self._rules = scope.reactive_value((), label="validation_rules")
        self._validators = scope.reactive_value((), label="child_validators")

        # Announce the feedback channel to the UI layer (just once per session)
        if not scope.user_data.get(VALIDATOR_INITIALIZED):
            scope.send_custom_message(
                get_init_message_type(),
                {"feedback_message_type": ValidationFeedback(results={}).get_event_name()},
            )
            scope.user_data.set(VALIDATOR_INITIALIZED, True)

        scope.on_close(self._on_scope_closed)

    # --------------- properties ---------------
    @property
    def scope(self) -> ReactiveScope:
        return self._scope

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def is_child(self) -> bool:
        return self._is_child

    @property
    def parent(self) -> Optional[InputValidator]:
        return self._parent

    @property
    def validators(self) -> tuple[InputValidator, ...]:
        return self._scope.isolate(self._validators.get)

    # --------------- configuration ---------------
    def condition(self, cond: Any = _MISSING) -> Any:
        """
        Get or set a condition that overrides all rules of this validator.

        Before validating, the condition is called; unless it returns exactly
        True, every rule is skipped and every field reachable from this
        validator (children included) is reported as passing.

        Args:
            cond: Omit to read the current condition. Otherwise a zero-argument
                callable, a one-argument callable whose argument is ignored,
                or None (equivalent to always True).

        Returns:
            The condition as it was set (or None) when called without arguments,
            otherwise the validator itself.
        """
        if cond is _MISSING:
            return self._scope.isolate(self._condition.get)
        self._condition.set(_check_condition(cond))
        return self

    def add_validator(self, validator: InputValidator) -> InputValidator:
        """
        Add another validator as a child of this one.

        This validator is only valid when all of its children are, and its
        feedback covers the children's fields. The child is disabled and
        from then on ignores its own `enable()`/`disable()` calls.

        Raises:
            InvalidArgumentException: `validator` is not an `InputValidator`.
            ValidatorCycleException: `validator` is this validator or one of its ancestors.
            ValidatorAlreadyAttachedException: `validator` already belongs to another parent.
        """
        if not isinstance(validator, InputValidator):
            raise InvalidArgumentException("add_validator", "validator", "InputValidator object")
        if validator._parent is self:
            return self
        if validator is self or self._has_ancestor(validator):
            raise ValidatorCycleException(validator, self)
        if validator._parent is not None:
            raise ValidatorAlreadyAttachedException(validator)

        validator._attach_to(self)
        children = self._scope.isolate(self._validators.get)
        self._validators.set((*children, validator))
        logger.debug(f"[VALIDATOR] Attached child validator ({len(children) + 1} total)")
        return self

    def add_rule(self, input_id: str, rule: Optional[Rule], *args: Any, scope: Optional[ReactiveScope] = None, **kwargs: Any) -> InputValidator:
        """
        Add a validation rule for a single field.

        Rules for the same field run in the order they were added; the first
        one that fails provides the field's message and the rest are skipped.

        Args:
            input_id: Field name, local to `scope` (pass "x", not the namespaced id).
            rule: Callable taking the field value (plus `args`/`kwargs`) and
                returning None on success or a single error message string.
                None registers a rule that always passes.
            *args: Extra positional arguments passed to `rule` after the value.
            scope: Scope the field belongs to. Defaults to the validator's scope.
            **kwargs: Extra keyword arguments passed to `rule`.
        """
        if rule is None:
            rule = _always_pass
        if not callable(rule):
            raise InvalidArgumentException("add_rule", "rule", "None or a callable")

        def applied_rule(value: Any) -> Optional[str]:
            return rule(value, *args, **kwargs)

        entry = RuleEntry(input_id=input_id, rule=applied_rule, scope=scope if scope is not None else self._scope)
        rules = self._scope.isolate(self._rules.get)
        self._rules.set((*rules, entry))
        return self

    # --------------- evaluation ---------------
    def fields(self) -> list[str]:
        """Fully-qualified keys of every field reachable from this validator."""
        fields: list[str] = []
        for validator in self._validators.get():
            fields.extend(validator.fields())
        fields.extend(entry.key for entry in self._rules.get())
        return list(dict.fromkeys(fields))

    def validate(self) -> ValidationResults:
        """
        Run the validation rules and gather the results.

        Most apps should use `is_valid()` and `enable()` instead.

        Returns:
            Fully-qualified field key -> None (passing) or error message.

        Raises:
            InvalidRuleResultException: A rule returned neither None nor a string.
            Exception: Anything a rule raises propagates unchanged.
        """
        condition = self._condition.get()
        if condition is not None and _evaluate_condition(condition) is not True:
            return {field: None for field in self.fields()}

        dependency_results: ValidationResults = {}
        for validator in self._validators.get():
            dependency_results = merge_results(dependency_results, validator.validate())

        results = {key: self._first_failure(chain) for key, chain in self._rule_chains().items()}
        return merge_results(dependency_results, results)

    def is_valid(self) -> bool:
        """True if all validation rules currently pass."""
        return all(message is None for message in self.validate().values())

    def _rule_chains(self) -> dict[str, list[RuleEntry]]:
        chains: dict[str, list[RuleEntry]] = {}
        # Registration order, so a chain keeps its priority even when two local
        # names resolve to the same fully-qualified key
        for entry in self._rules.get():
            chains.setdefault(entry.key, []).append(entry)
        return chains

    @staticmethod
    def _first_failure(chain: list[RuleEntry]) -> Optional[str]:
        for entry in chain:
            message = entry.apply()
            if message is not None:
                return message
        return None

    # --------------- feedback lifecycle ---------------
    def enable(self) -> InputValidator:
        """
        Start pushing validation feedback to the UI and keep it up to date.

        Safe to call on an already enabled validator. Ignored on validators
        that were added to another validator, and once the session has ended.
        """
        if self._is_child or self._enabled or self._scope.closed:
            return self

        self._observer_handle = self._scope.observe(
            self._push_feedback,
            priority=self._priority,
            label="input_validator_feedback",
        )
        self._enabled = True
        logger.debug(f"[VALIDATOR] Feedback enabled (priority {self._priority})")
        return self

    def disable(self) -> InputValidator:
        """
        Stop live feedback and clear the feedback currently shown for all fields
        of this validator. `enable()` can be called again later.
        """
        if not self._enabled:
            return self

        if self._observer_handle is not None:
            self._observer_handle.destroy()
        self._observer_handle = None
        self._enabled = False
        logger.debug("[VALIDATOR] Feedback disabled")

        if not self._is_child and not self._scope.closed:
            results = self._scope.isolate(self.validate)
            send_feedback(self._scope, ValidationFeedback(results=results).cleared())
        return self

    @contextmanager
    def live(self) -> Iterator[InputValidator]:
        """Enable feedback for the duration of a `with` block."""
        self.enable()
        try:
            yield self
        finally:
            self.disable()

    def _push_feedback(self) -> None:
        send_feedback(self._scope, ValidationFeedback(results=self.validate()))

    def _on_scope_closed(self) -> None:
        # The session already destroyed the observer; nothing is left to clear
        if self._enabled:
            self._observer_handle = None
            self._enabled = False
            logger.debug("[VALIDATOR] Feedback stopped, session closed")

    # --------------- tree ---------------
    def _attach_to(self, parent: InputValidator) -> None:
        self.disable()
        self._is_child = True
        self._parent = parent

    def _has_ancestor(self, validator: InputValidator) -> bool:
        node = self._parent
        while node is not None:
            if node is validator:
                return True
            node = node._parent
        return False

    def __repr__(self) -> str:
        return f"<InputValidator at {id(self):#x} scope={self._scope!r} child={self._is_child}>"


__all__ = [
    "InputValidator",
    "RuleEntry",
    "VALIDATOR_INITIALIZED",
]
