from decimal import Decimal

from installment_calc.form import FormState, apply_edit, apply_edits, submit


class TestApplyEdit:
    def test_defaults(self):
        state = FormState()
        assert state.field_values() == {
            "original_price": "0",
            "monthly_payment": "0",
            "months": "0",
        }
        assert state.result is None
        assert state.error == ""

    def test_valid_edit_is_stored(self):
        state = apply_edit(FormState(), "original_price", "1000")
        assert state.original_price == "1000"
        assert state.error == ""

    def test_empty_text_is_accepted(self):
        state = apply_edit(FormState(), "months", "")
        assert state.months == ""
        assert state.error == ""

    def test_invalid_edit_keeps_previous_value(self):
        state = apply_edit(FormState(), "original_price", "1000")
        state = apply_edit(state, "original_price", "1000a")
        assert state.original_price == "1000"
        assert state.error == "Please enter a valid number for Original Price"

    def test_fields_are_independent(self):
        state = apply_edit(FormState(), "monthly_payment", "-5")
        assert state.monthly_payment == "0"
        assert state.original_price == "0"
        assert state.months == "0"

    def test_valid_edit_on_other_field_clears_error(self):
        state = apply_edit(FormState(), "months", "1.2.3")
        assert state.error == "Please enter a valid number for Months"
        state = apply_edit(state, "original_price", "50")
        assert state.error == ""

    def test_state_is_not_mutated(self):
        original = FormState()
        apply_edit(original, "months", "12")
        assert original.months == "0"


class TestApplyEdits:
    def test_all_valid(self):
        state = apply_edits(
            FormState(), {"original_price": "1000", "monthly_payment": "100", "months": "12"}
        )
        assert state.field_values() == {
            "original_price": "1000",
            "monthly_payment": "100",
            "months": "12",
        }
        assert state.error == ""

    def test_last_rejection_wins(self):
        state = apply_edits(
            FormState(), {"original_price": "abc", "monthly_payment": "100", "months": "x"}
        )
        assert state.error == "Please enter a valid number for Months"
        assert state.original_price == "0"
        assert state.monthly_payment == "100"

    def test_later_valid_field_does_not_hide_rejection(self):
        state = apply_edits(FormState(), {"original_price": "abc", "monthly_payment": "100"})
        assert state.error == "Please enter a valid number for Original Price"

    def test_missing_fields_untouched(self):
        state = apply_edits(FormState(months="6"), {"original_price": "10"})
        assert state.months == "6"


class TestSubmit:
    def test_computes_result(self):
        state = submit(FormState(original_price="1000", monthly_payment="100", months="12"))
        assert state.result.total_payment == Decimal("1200.00")
        assert len(state.result.monthly_breakdown) == 12
        assert state.error == ""

    def test_initial_state_submits(self):
        state = submit(FormState())
        assert state.result.monthly_breakdown == ()
        assert state.result.interest_percentage is None

    def test_result_replaced_wholesale(self):
        first = submit(FormState(original_price="1000", monthly_payment="100", months="12"))
        second = submit(apply_edit(first, "months", "6"))
        assert len(second.result.monthly_breakdown) == 6
        assert len(first.result.monthly_breakdown) == 12

    def test_months_beyond_cap(self):
        computed = submit(FormState(original_price="1000", monthly_payment="100", months="12"))
        state = submit(apply_edit(computed, "months", "13"), max_months=12)
        assert state.result is None
        assert "must not exceed 12" in state.error
