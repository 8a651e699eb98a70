# UI.py
""""PySide6 user interface for the expression calculator.

Structure
---------
- Calculator UI: main window with expression, bindings and variable fields
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Read the expression, the variable bindings ("x=1, y=2") and the variable to differentiate by
- Dispatch evaluation / differentiation to MathEngine in a worker thread
- Render results and show MathEngine errors as dialogs
- Clipboard integration: copy the result (Shift + copy: the derivative), paste an expression,
  optional auto-evaluate after paste


Responsibilities (Settings)
---------------------------

- Load Current Settings and Settings Descriptions via Config_Manager
- Validate user input (minimum decimal places, known number domain)
- Save and apply theme changes immediately


Threading Note
--------------
Evaluation runs off the UI thread in Worker(QObject), so the UI stays responsive for very deep expressions.
Results (or errors) are emitted via a Qt signal and handled back in the UI.
"""""

from PySide6 import QtWidgets
from PySide6.QtCore import QObject, Signal
import sys
import logging
import threading
from pynput.keyboard import Controller
import pyperclip
from . import error as E
from . import config_manager as config_manager
from . import MathEngine as MathEngine
from .CommandLine import parse_variable
from .ScientificEngine import DOMAINS, get_domain

logger = logging.getLogger(__name__)

MODE_EVALUATE = "evaluate"
MODE_DIFFERENTIATE = "differentiate"


def is_shift_pressed():
    """""

    Small and simple check, whether shift is pressed or not.
    Used for "shift + copy" to copy the derivative instead of the display.

    """""

    keyboard_controller = Controller()
    return keyboard_controller.shift_pressed


def parse_bindings(text, domain):
    """Turn "x=1, y=2" (commas or blanks between assignments) into a bindings dict."""
    variables = {}
    for token in text.replace(",", " ").split():
        parse_variable(token, domain, variables)
    return variables


class Worker(QObject):
    """""

    Runs one evaluation or differentiation in a separate thread
    and emits job_finished(result, problem, mode) back to the Calculator UI.

    result is the display string, a (original, derivative) tuple, or a MathError.

    """""

    job_finished = Signal(object, str, str)

    def __init__(self, problem, mode, bindings_text="", var_name=""):
        super().__init__()
        self.data = problem
        self.mode = mode
        self.bindings_text = bindings_text
        self.var_name = var_name

    def run_job(self):

        try:
            domain = get_domain(config_manager.load_setting_value("number_domain"))

            if self.mode == MODE_EVALUATE:
                bindings = parse_bindings(self.bindings_text, domain)
                result = MathEngine.calculate(self.data, bindings, domain)
            else:
                result = MathEngine.derive(self.data, self.var_name, domain)

            self.job_finished.emit(result, self.data, self.mode)

        except E.MathError as e:
            # Known, handled error (e.g., "Division by zero")
            if e.equation is None:
                e.equation = self.data
            self.job_finished.emit(e, self.data, self.mode)

        except Exception as e:
            # Unexpected crash we didn't plan for (e.g., a bug in the code)
            logger.exception("Worker crashed")
            critical_error = E.MathError(
                message=f"Unexpected crash: {e}",
                code="9999",
                equation=self.data
            )
            self.job_finished.emit(critical_error, self.data, self.mode)


class SettingsDialog(QtWidgets.QDialog):
    """""

    Settings window. Booleans become checkboxes, everything else an input field.
    Values are validated before config.json is written.

    """""

    settings_saved = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}

        # --- 1. Window Setup ---
        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(340, 220)

        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        # --- 3. Build Widgets ---
        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            else:
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                label_text = description + " (min. 2):" if key_value == "decimal_places" else description + ":"
                label = QtWidgets.QLabel(label_text)
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))  # Show current value as placeholder

                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = input_field

        # --- 4. OK / Cancel Buttons ---
        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(lambda: self.save_settings(self.setting_value_list))
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def validate(self, key_value, new_value_str, old_value):
        """Convert the text of an input field to the type of `old_value`; raise ValueError if invalid."""
        if isinstance(old_value, int):
            new_value = int(new_value_str)
            if key_value == "decimal_places" and new_value < 2:
                raise ValueError(f"'{new_value}' is too small. Minimum is 2.")
            return new_value

        if key_value == "number_domain" and new_value_str.lower() not in DOMAINS:
            raise ValueError(f"'{new_value_str}' is not one of: {', '.join(DOMAINS)}")
        return new_value_str.lower()

    def save_settings(self, setting_value_list):
        for key_value, widget in self.widgets.items():

            if isinstance(widget, QtWidgets.QCheckBox):
                setting_value_list[key_value] = widget.isChecked()

            elif isinstance(widget, QtWidgets.QLineEdit):
                new_value_str = widget.text().strip()

                # If user left it blank, keep the old value
                if new_value_str == "":
                    continue

                try:
                    setting_value_list[key_value] = self.validate(key_value, new_value_str,
                                                                  setting_value_list[key_value])
                except ValueError as e:
                    logger.warning("Invalid input for %s: %s", key_value, e)
                    QtWidgets.QMessageBox.critical(self, "Invalid Input:",
                                                   f"Error in input for '{key_value}':\n\n{e}\n\nPlease correct your input.")
                    return  # Stop saving!

        saved_settings = config_manager.save_setting(setting_value_list)

        if saved_settings != {}:
            self.settings_saved.emit()
            self.accept()
            self.update_darkmode()
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           f"Error 4501: {E.ERROR_MESSAGES['4501']}config.json")

    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class CalculatorWindow(QtWidgets.QWidget):

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Instance State ---
        self.calculator_result = ""  # Last display text
        self.derivative = ""  # Last derivative text
        self.thread_active = False  # Is a calculation running?

        # --- 3. Window Setup ---
        self.setWindowTitle("Expression Calculator")
        self.resize(520, 260)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        # --- 4. Input Fields ---
        form_layout = QtWidgets.QFormLayout()
        main_v_layout.addLayout(form_layout)

        self.expression_field = QtWidgets.QLineEdit()
        self.expression_field.setPlaceholderText("sin(x) * exp(y) ^ 2")
        self.expression_field.returnPressed.connect(self.start_evaluation)
        form_layout.addRow("Expression:", self.expression_field)

        self.bindings_field = QtWidgets.QLineEdit()
        self.bindings_field.setPlaceholderText("x=1, y=2")
        self.bindings_field.returnPressed.connect(self.start_evaluation)
        form_layout.addRow("Variables:", self.bindings_field)

        self.variable_field = QtWidgets.QLineEdit("x")
        form_layout.addRow("Differentiate by:", self.variable_field)

        # --- 5. Display ---
        self.display = QtWidgets.QLineEdit("")
        self.display.setReadOnly(True)
        font = self.display.font()
        font.setPointSize(16)
        self.display.setFont(font)
        main_v_layout.addWidget(self.display)

        # --- 6. Buttons ---
        button_row = QtWidgets.QHBoxLayout()
        main_v_layout.addLayout(button_row)
        self.button_objects = {}

        self.buttons = [
            ("Evaluate", self.start_evaluation),
            ("Differentiate", self.start_differentiation),
            ("📋", self.copy_result),
            ("📑", self.paste_expression),
            ("⚙️", self.open_settings),
        ]
        for text, handler in self.buttons:
            button = QtWidgets.QPushButton(text)
            button.clicked.connect(lambda checked=False, h=handler: h())
            button_row.addWidget(button)
            self.button_objects[text] = button

        self.update_darkmode()

    # --- Worker dispatch ---

    def start_job(self, mode):
        if self.thread_active:
            QtWidgets.QMessageBox.warning(self, "Busy", f"Error 4002: {E.ERROR_MESSAGES['4002']}")
            return

        problem = self.expression_field.text()
        self.thread_active = True
        self.update_run_buttons()
        self.display.setText("...")
        QtWidgets.QApplication.processEvents()  # Force UI update *before* starting thread

        worker_instance = Worker(problem, mode,
                                 bindings_text=self.bindings_field.text(),
                                 var_name=self.variable_field.text().strip())
        worker_instance.job_finished.connect(self.job_result)
        self.worker_instance = worker_instance  # Keep a reference until the signal arrives
        my_thread = threading.Thread(target=worker_instance.run_job, daemon=True)
        my_thread.start()

    def start_evaluation(self):
        self.start_job(MODE_EVALUATE)

    def start_differentiation(self):
        self.start_job(MODE_DIFFERENTIATE)

    def job_result(self, result, equation, mode):
        self.thread_active = False
        self.update_run_buttons()

        if isinstance(result, E.MathError):
            self.show_error(result)
            self.display.setText("")
            return

        if mode == MODE_DIFFERENTIATE:
            original, derivative = result
            self.derivative = derivative
            var_name = self.variable_field.text().strip()
            final_display_text = f"d/d{var_name} {original} = {derivative}"
        else:
            final_display_text = f"{equation} {result}"

        self.calculator_result = final_display_text
        self.display.setText(final_display_text)
        self.display.setCursorPosition(0)

    def show_error(self, error_obj):
        error_box = QtWidgets.QMessageBox(self)
        error_code = error_obj.code
        additional_info = f"Details: {error_obj.message}\nEquation: {error_obj.equation}"

        error_box.setIcon(QtWidgets.QMessageBox.Critical)
        error_box.setWindowTitle("Calculation error")
        error_box.setText(f"Error {error_code}: {E.ERROR_MESSAGES.get(error_code, 'Unknown error')}")
        error_box.setInformativeText(additional_info)
        error_box.setStandardButtons(QtWidgets.QMessageBox.Ok)
        error_box.setStyleSheet(self.get_message_box_stylesheet())
        error_box.exec()

    # --- Clipboard ---

    def copy_result(self):
        if is_shift_pressed():
            if not self.derivative:
                self.show_error(E.MathError(E.ERROR_MESSAGES["4003"], code="4003"))
                return
            pyperclip.copy(self.derivative)
        else:
            pyperclip.copy(self.display.text())

    def paste_expression(self):
        clipboard_text = pyperclip.paste().strip()
        if not clipboard_text:
            return
        self.expression_field.setText(clipboard_text)

        # Optional auto-evaluate after paste (configurable)
        if self.setting_value_list["after_paste_enter"] == True:
            self.start_evaluation()

    # --- Look & settings ---

    def update_run_buttons(self):
        for text in ("Evaluate", "Differentiate"):
            button = self.button_objects[text]
            button.setEnabled(not self.thread_active)

    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("""
                        QWidget {background-color: #121212; color: white;}
                        QLineEdit {background-color: #444444; color: white; border: 1px solid #666666;}
                        QPushButton {background-color: #2e2e2e; color: white; font-weight: bold;}""")
        else:
            self.setStyleSheet("")

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # "exec" makes the dialog modal (blocks main window)

        # Reload settings after dialog closes so darkmode etc. apply
        self.setting_value_list = config_manager.load_setting_value("all")
        self.update_darkmode()

    def get_message_box_stylesheet(self):
        if self.setting_value_list["darkmode"] == True:
            return """
                QMessageBox {
                    background-color: #121212;
                    color: white;
                }
                QLabel {
                    color: white;
                }
                QPushButton {
                    background-color: #2e2e2e;
                    color: white;
                    border: 1px solid #444444;
                    padding: 5px 15px;
                }
            """
        else:
            return ""


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())
