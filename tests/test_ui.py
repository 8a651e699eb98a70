import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Needs Qt libraries and a keyboard backend for pynput
UI = pytest.importorskip("Calculus.UI", exc_type=ImportError)


@pytest.fixture(scope="module")
def qapp():
    return UI.QtWidgets.QApplication.instance() or UI.QtWidgets.QApplication([])


def test_run_buttons_do_not_name_a_variable(qapp):
    window = UI.CalculatorWindow()
    window.variable_field.setText("t")

    labels = [button.text() for button in window.button_objects.values()]

    assert "Differentiate" in labels
    assert "d/dx" not in labels


def test_run_buttons_follow_worker_state(qapp):
    window = UI.CalculatorWindow()

    window.thread_active = True
    window.update_run_buttons()

    assert not window.button_objects["Evaluate"].isEnabled()
    assert not window.button_objects["Differentiate"].isEnabled()
