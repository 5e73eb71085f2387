"""Unit tests for ufunc_override.core.scanner and ufunc_override.core.policy."""
from __future__ import annotations

from decimal import Decimal

import pytest

from ufunc_override import DECLINED, SupportsOverride
from ufunc_override.core.errors import ConfigurationError
from ufunc_override.core.policy import TypePolicy
from ufunc_override.core.scanner import check_arguments, scan_candidates


# ---------------------------------------------------------------------------
# Test fixtures
# ---------------------------------------------------------------------------


class Capable(SupportsOverride):
    def __ufunc_override__(self, operation, method, position, inputs, kwargs):
        return DECLINED


class Structural:
    """Implements the hook without subclassing the interface."""

    def __ufunc_override__(self, operation, method, position, inputs, kwargs):
        return DECLINED


class OptedOut(Structural):
    __ufunc_override__ = None


class BaseArray:
    def __ufunc_override__(self, operation, method, position, inputs, kwargs):
        return DECLINED


class SubArray(BaseArray):
    pass


class CapableFloat(float):
    def __ufunc_override__(self, operation, method, position, inputs, kwargs):
        return DECLINED


def _scan(args, **kwargs):
    kwargs.setdefault("max_arity", 32)
    kwargs.setdefault("policy", TypePolicy())
    return scan_candidates(args, **kwargs)


# ===========================================================================
# Argument validation
# ===========================================================================


class TestCheckArguments:
    def test_accepts_tuple(self) -> None:
        args = (1, 2)
        assert check_arguments(args, 4) is args

    def test_accepts_list(self) -> None:
        assert check_arguments([1, 2], 4) == [1, 2]

    @pytest.mark.parametrize(
        "bad",
        ["ab", b"ab", {"a": 1}, {1, 2}, (x for x in range(2)), None, 3],
    )
    def test_rejects_non_sequences(self, bad: object) -> None:
        with pytest.raises(ConfigurationError, match="tuple or list"):
            check_arguments(bad, 4)

    def test_rejects_too_many(self) -> None:
        with pytest.raises(ConfigurationError, match="too many arguments"):
            check_arguments((1, 2, 3), 2)

    def test_exact_bound_is_allowed(self) -> None:
        assert check_arguments((1, 2), 2) == (1, 2)

    def test_configuration_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            check_arguments((1, 2, 3), 1)


# ===========================================================================
# scan_candidates
# ===========================================================================


class TestScanCandidates:
    def test_no_capable_arguments(self) -> None:
        assert _scan((1, 2.0, "x", object())) == ()

    def test_empty_call(self) -> None:
        assert _scan(()) == ()

    def test_positions_are_preserved(self) -> None:
        a, b = Capable(), Capable()
        candidates = _scan((1, a, 2, b))
        assert [c.position for c in candidates] == [1, 3]
        assert candidates[0].value is a
        assert candidates[1].value is b

    def test_structural_implementations_participate(self) -> None:
        candidates = _scan((Structural(),))
        assert len(candidates) == 1

    def test_hook_set_to_none_opts_out(self) -> None:
        assert _scan((OptedOut(),)) == ()

    def test_exact_base_type_is_plain(self) -> None:
        policy = TypePolicy(base_types=(BaseArray,))
        assert _scan((BaseArray(),), policy=policy) == ()

    def test_base_type_subclass_participates(self) -> None:
        policy = TypePolicy(base_types=(BaseArray,))
        candidates = _scan((BaseArray(), SubArray()), policy=policy)
        assert [c.position for c in candidates] == [1]

    def test_scalar_subclass_is_plain(self) -> None:
        assert _scan((CapableFloat(1.0),)) == ()

    def test_scalar_types_are_configurable(self) -> None:
        policy = TypePolicy(scalar_types=(Decimal,))
        assert _scan((CapableFloat(1.0),), policy=policy)[0].position == 0

    def test_too_many_arguments_raise_before_scanning(self) -> None:
        with pytest.raises(ConfigurationError):
            _scan((Capable(), Capable()), max_arity=1)

    def test_value_type_property(self) -> None:
        candidate = _scan((Capable(),))[0]
        assert candidate.value_type is Capable


# ===========================================================================
# TypePolicy predicates
# ===========================================================================


class TestTypePolicy:
    def test_strict_subtype(self) -> None:
        assert TypePolicy.is_strict_subtype(SubArray, BaseArray)

    def test_same_type_is_not_strict_subtype(self) -> None:
        assert not TypePolicy.is_strict_subtype(BaseArray, BaseArray)

    def test_supertype_is_not_strict_subtype(self) -> None:
        assert not TypePolicy.is_strict_subtype(BaseArray, SubArray)

    def test_runtime_type(self) -> None:
        assert TypePolicy.runtime_type(SubArray()) is SubArray

    def test_handler_for_returns_bound_method(self) -> None:
        value = Capable()
        handler = TypePolicy.handler_for(value)
        assert handler.__self__ is value

    def test_handler_for_rejects_non_callable(self) -> None:
        class NotCallable:
            __ufunc_override__ = 42

        with pytest.raises(AttributeError, match="not callable"):
            TypePolicy.handler_for(NotCallable())

    def test_registered_virtual_subclass_is_capable(self) -> None:
        class Virtual:
            pass

        SupportsOverride.register(Virtual)
        assert TypePolicy.is_capable(Virtual())


# ===========================================================================
# Hooks attached or removed after first use
# ===========================================================================


class TestLateHooks:
    def test_hook_attached_after_negative_scan(self) -> None:
        class Late:
            pass

        assert not isinstance(Late(), SupportsOverride)
        assert _scan((Late(),)) == ()

        Late.__ufunc_override__ = lambda self, *args: DECLINED  # type: ignore[attr-defined]
        assert TypePolicy.is_capable(Late())
        assert [c.position for c in _scan((1, Late()))] == [1]

    def test_hook_set_to_none_after_positive_scan(self) -> None:
        class Fading:
            def __ufunc_override__(self, operation, method, position, inputs, kwargs):
                return DECLINED

        assert isinstance(Fading(), SupportsOverride)
        assert len(_scan((Fading(),))) == 1

        Fading.__ufunc_override__ = None  # type: ignore[assignment]
        assert not TypePolicy.is_capable(Fading())
        assert _scan((Fading(),)) == ()

    def test_explicit_subclass_can_opt_out(self) -> None:
        class Quiet(Capable):
            __ufunc_override__ = None  # type: ignore[assignment]

        assert not TypePolicy.is_capable(Quiet())

    def test_explicit_subclass_is_capable(self) -> None:
        assert TypePolicy.is_capable(Capable())
