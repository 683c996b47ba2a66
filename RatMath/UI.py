# UI.py
"""""PySide6 user interface for the RatMath calculator.

Structure
---------
- Calculator UI: main window with an editable display and a button grid
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, display, layout and buttons for the RatMath notations
- Dispatch the expression to MathEngine in a worker thread
- Render results and show MathEngine errors as dialogs
- Clipboard integration (copy result)

Responsibilities (Settings)
---------------------------
- Load current settings and descriptions via config_manager
- Validate user input with config_manager.validate_settings before saving

Threading Note
--------------
Evaluation runs off the UI thread in Worker(QObject); the result (or
error) comes back through a Qt signal.
"""""

from PySide6 import QtWidgets
from PySide6.QtCore import Qt, QObject, Signal
import sys
import threading
import pyperclip
from . import error as E  # Imports error.py as a module
from . import config_manager as config_manager  # Imports config_manager.py as a module
from . import MathEngine as MathEngine  # Imports MathEngine.py as a module

OUTPUT_MODES = ["BOTH", "DECI", "RAT"]


class Worker(QObject):
    """""

    This Class always runs in a separate thread, transmits the problem to MathEngine.py
    and emits a Signal when the calculation is done / failed back to the Calculator UI

    """""

    job_finished = Signal(object, str, int)

    def __init__(self, problem):
        super().__init__()
        self.data = problem

    def run_Calc(self):

        try:
            # --- 1. Start Calculation ---
            result = MathEngine.calculate(self.data)

            # --- 2. Send Success Signal ---
            self.job_finished.emit(result, self.data, 1)

        except E.MathError as e:
            # --- 3. Send Math Error Signal ---
            self.job_finished.emit(e, self.data, 0)

        except Exception as e:
            # --- 4. Send Critical Error Signal ---
            # The thread must always report back, otherwise the UI stays busy
            critical_error = E.MathError(
                message=f"Unexpected crash: {e}",
                code="9999",
                equation=self.data
            )
            self.job_finished.emit(critical_error, self.data, 0)


class SettingsDialog(QtWidgets.QDialog):
    """""

    Settings window. Booleans become checkboxes, output_mode a combo box and
    the integer settings input fields. Saving validates the whole set first.

    """""

    settings_saved = Signal()  # Signal to tell the main window to update

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}

        # --- 1. Window Setup ---
        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(360, 300)

        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_settings_with_defaults()
        self.setting_description_list = config_manager.load_setting_description("all")

        # --- 3. Build Widgets ---
        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            elif key_value == "output_mode":
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                combo = QtWidgets.QComboBox()
                combo.addItems(OUTPUT_MODES)
                combo.setCurrentText(str(value))
                row_h_layout.addWidget(QtWidgets.QLabel(description + ":"))
                row_h_layout.addWidget(combo)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = combo

            else:
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))  # Show current value as placeholder
                row_h_layout.addWidget(QtWidgets.QLabel(description + ":"))
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = input_field

        # --- 4. OK / Cancel Buttons ---
        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self):
        new_settings = dict(self.setting_value_list)

        for key_value, widget in self.widgets.items():
            if isinstance(widget, QtWidgets.QCheckBox):
                new_settings[key_value] = widget.isChecked()

            elif isinstance(widget, QtWidgets.QComboBox):
                new_settings[key_value] = widget.currentText()

            elif isinstance(widget, QtWidgets.QLineEdit):
                new_value_str = widget.text().strip()
                # If the user left it blank, keep the old value
                if new_value_str == "":
                    continue
                try:
                    new_settings[key_value] = int(new_value_str)
                except ValueError:
                    QtWidgets.QMessageBox.critical(self, "Invalid Input:",
                                                   f"Error in input for '{key_value}':\n\n'{new_value_str}' "
                                                   "is not a whole number.\n\nPlease correct your input.")
                    return  # Stop saving!

        # --- Validation ---
        try:
            new_settings = config_manager.validate_settings(new_settings)
        except E.ConfigurationError as e:
            QtWidgets.QMessageBox.critical(self, "Invalid Input:",
                                           f"Error {e.code}: {E.ERROR_MESSAGES.get(e.code, '')}\n\n{e.message}")
            return

        # --- Write to File ---
        saved_settings = config_manager.save_setting(new_settings)
        if saved_settings != {}:
            self.setting_value_list = saved_settings
            self.settings_saved.emit()
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           f"Error 4501: {E.ERROR_MESSAGES['4501']}config.json")

    def update_darkmode(self):
        # Applies the darkmode stylesheet if the setting is True
        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QComboBox {background-color: #444444;color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")  # Revert to default stylesheet


class CalculatorPrototype(QtWidgets.QWidget):

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_settings_with_defaults()

        # --- 2. Instance State Variables ---
        self.calculator_result = ""  # Last result, used by the copy button
        self.thread_active = False  # Is a calculation running?
        self.worker = None

        # --- 3. Window Setup ---
        self.button_objects = {}
        self.setWindowTitle("RatMath")
        self.resize(420, 520)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 4. Display Setup ---
        # Editable, so notations without a button can be typed directly
        self.display = QtWidgets.QLineEdit("")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        font = self.display.font()
        font.setPointSize(20)
        self.display.setFont(font)
        self.display.returnPressed.connect(lambda: self.handle_button_press('⏎'))
        main_v_layout.addWidget(self.display)

        self.result_label = QtWidgets.QLabel("")
        self.result_label.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.result_label.setWordWrap(True)
        self.result_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        main_v_layout.addWidget(self.result_label)

        # --- 5. Button Grid Setup ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 3)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(0)
        button_grid.setContentsMargins(0, 0, 0, 0)

        # (text, row, column)
        self.buttons = [
            ('⚙', 0, 0), ('📋', 0, 1), ('(', 0, 2), (')', 0, 3), ('<', 0, 4),
            (':', 1, 0), ('#', 1, 1), ('..', 1, 2), ('^', 1, 3), ('/', 1, 4),
            ('E', 2, 0), ('7', 2, 1), ('8', 2, 2), ('9', 2, 3), ('*', 2, 4),
            ('!', 3, 0), ('4', 3, 1), ('5', 3, 2), ('6', 3, 3), ('-', 3, 4),
            ('**', 4, 0), ('1', 4, 1), ('2', 4, 2), ('3', 4, 3), ('+', 4, 4),
            ('C', 5, 0), ('~', 5, 1), ('0', 5, 2), ('.', 5, 3), ('⏎', 5, 4)
        ]

        for text, row, col in self.buttons:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)
            if text == '⏎':
                button.setStyleSheet("background-color: #007bff; color: white; font-weight: bold;")
            button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))
            button_grid.addWidget(button, row, col)
            self.button_objects[text] = button

        self.update_darkmode()

    def handle_button_press(self, value):
        if value == '⚙':
            self.open_settings()

        elif value == '📋':
            # Copies the last result without the leading "= "
            if self.calculator_result:
                pyperclip.copy(self.calculator_result)

        elif value == '⏎':
            self.start_calculation()

        elif value == '<':
            self.display.setText(self.display.text()[:-1])

        elif value == 'C':
            self.display.setText("")
            self.result_label.setText("")

        else:
            self.display.insert(value)

    def start_calculation(self):
        problem = self.display.text()
        if self.thread_active:
            self.show_error(E.MathError("Calculation already Running!", code="4000", equation=problem))
            return

        self.thread_active = True
        self.update_return_button()

        self.worker = Worker(problem)
        self.worker.job_finished.connect(self.Calc_result, Qt.ConnectionType.QueuedConnection)
        threading.Thread(target=self.worker.run_Calc, daemon=True).start()

    def update_return_button(self):
        # Red "X" while a calculation is running, blue otherwise
        return_button = self.button_objects.get('⏎')
        if not return_button:
            return

        if self.thread_active == True:
            return_button.setStyleSheet("background-color: #FF0000; color: white; font-weight: bold;")
            return_button.setText("X")
        else:
            return_button.setStyleSheet("background-color: #007bff; color: white; font-weight: bold;")
            return_button.setText("⏎")

    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            for text, button in self.button_objects.items():
                if text != '⏎':
                    button.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            self.setStyleSheet("background-color: #121212;")
            self.display.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            self.result_label.setStyleSheet("color: white;")
        else:
            for text, button in self.button_objects.items():
                if text != '⏎':
                    button.setStyleSheet("font-weight: normal;")
            self.setStyleSheet("")
            self.display.setStyleSheet("font-weight: bold;")
            self.result_label.setStyleSheet("")
        self.update_return_button()

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # "exec" makes the dialog modal

        # Reload settings after the dialog closes, so darkmode changes apply
        self.setting_value_list = config_manager.load_settings_with_defaults()
        self.update_darkmode()

    def get_message_box_stylesheet(self):
        if self.setting_value_list["darkmode"] == True:
            return """
                QMessageBox {background-color: #121212; color: white;}
                QLabel {color: white;}
                QPushButton {background-color: #2e2e2e; color: white; border: 1px solid #444444; padding: 5px 15px;}
            """
        return ""

    def show_error(self, error_obj):
        error_box = QtWidgets.QMessageBox(self)
        error_code = error_obj.code
        error_box.setIcon(QtWidgets.QMessageBox.Critical)
        error_box.setWindowTitle("Calculation error")
        error_box.setText(f"Error {error_code}: {E.ERROR_MESSAGES.get(error_code, 'Unknown error')}")
        error_box.setInformativeText(f"Details: {error_obj.message}\nEquation: {error_obj.equation}")
        error_box.setStandardButtons(QtWidgets.QMessageBox.Ok)
        error_box.setStyleSheet(self.get_message_box_stylesheet())
        error_box.exec()

    def Calc_result(self, result, equation, mode):
        # mode 1: result string, mode 0: MathError
        self.thread_active = False
        self.update_return_button()

        if mode == 0:
            self.show_error(result)
            return

        self.calculator_result = result[2:] if result.startswith("= ") else result
        self.result_label.setText(result)


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication()
    window = CalculatorPrototype()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
