"""Unit tests for ufunc_override.core.normalizer — normalize_call."""
from __future__ import annotations

import pytest

from ufunc_override.core.errors import ConfigurationError
from ufunc_override.core.models import NormalizedCall
from ufunc_override.core.normalizer import normalize_call


class TestInputs:
    def test_inputs_are_first_nin_arguments(self) -> None:
        call = normalize_call(("x", "y"), None, 2)
        assert call.inputs == ("x", "y")

    def test_inputs_are_a_tuple_for_list_arguments(self) -> None:
        call = normalize_call(["x", "y"], None, 2)
        assert call.inputs == ("x", "y")

    def test_zero_inputs(self) -> None:
        call = normalize_call(("o",), None, 0)
        assert call.inputs == ()
        assert call.kwargs == {"out": "o"}

    @pytest.mark.parametrize("nin", [-1, 3, 1.0, True, None])
    def test_invalid_nin(self, nin: object) -> None:
        with pytest.raises(ConfigurationError, match="number of inputs"):
            normalize_call(("x", "y"), None, nin)  # type: ignore[arg-type]


class TestKeywords:
    def test_missing_kwargs_become_empty_dict(self) -> None:
        assert normalize_call(("x",), None, 1).kwargs == {}

    def test_kwargs_are_copied(self) -> None:
        original = {"dtype": "f8"}
        call = normalize_call(("x",), original, 1)
        assert call.kwargs == original
        assert call.kwargs is not original

    def test_mutating_normalized_kwargs_leaves_caller_untouched(self) -> None:
        original = {"dtype": "f8"}
        call = normalize_call(("x", "o"), original, 1)
        call.kwargs["dtype"] = "i4"
        call.kwargs["extra"] = 1
        assert original == {"dtype": "f8"}

    def test_kwargs_view_is_read_only(self) -> None:
        call = normalize_call(("x",), {"a": 1}, 1)
        with pytest.raises(TypeError):
            call.kwargs_view["a"] = 2  # type: ignore[index]


class TestOutputFolding:
    def test_single_output_is_stored_bare(self) -> None:
        call = normalize_call(("x", "y", "outv"), None, 2)
        assert call.inputs == ("x", "y")
        assert call.kwargs == {"out": "outv"}

    def test_two_outputs_become_ordered_tuple(self) -> None:
        call = normalize_call(("x", "y", "out1", "out2"), None, 2)
        assert call.inputs == ("x", "y")
        assert call.kwargs == {"out": ("out1", "out2")}

    def test_single_tuple_output_is_not_unwrapped(self) -> None:
        pair = ("a", "b")
        call = normalize_call(("x", pair), None, 1)
        assert call.kwargs["out"] is pair

    def test_outputs_merge_with_other_kwargs(self) -> None:
        call = normalize_call(("x", "o"), {"where": True}, 1)
        assert call.kwargs == {"where": True, "out": "o"}

    def test_positional_output_replaces_keyword_out(self) -> None:
        original = {"out": "kw_out", "where": True}
        call = normalize_call(("x", "pos_out"), original, 1)
        assert call.kwargs == {"out": "pos_out", "where": True}
        assert original["out"] == "kw_out"

    def test_positional_outputs_replace_keyword_out_as_tuple(self) -> None:
        call = normalize_call(("x", "o1", "o2"), {"out": "kw_out"}, 1)
        assert call.kwargs == {"out": ("o1", "o2")}

    def test_keyword_out_without_positional_outputs_is_kept(self) -> None:
        call = normalize_call(("x",), {"out": "p"}, 1)
        assert call.kwargs == {"out": "p"}


def test_normalized_call_is_frozen() -> None:
    call = NormalizedCall(inputs=(1,))
    with pytest.raises(AttributeError):
        call.inputs = (2,)  # type: ignore[misc]
