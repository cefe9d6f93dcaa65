# UI.py
"""""
PySide6 user interface for MultiCalc.

Structure
---------
- Calculator UI: main window with mode selector, display, preview line and button grid
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, display, layout and the button grid of the active mode
- Forward every button press / key press as a token to the active calculator engine
- Render the response (input, preview, per-base values, error line)
- Clipboard integration: Shift + '=' copies the result
- Dark/light mode

The window holds no calculator logic. Everything goes through
Calculator.handle_button_click(), which returns plain data and never raises.

Responsibilities (Settings)
---------------------------
- Load current settings and their descriptions via config_manager
- Validate user input (e.g. precision must be a number >= 0)
- Save and apply theme changes immediately
"""""

import sys
import logging
from pathlib import Path

from PySide6 import QtWidgets, QtGui
from PySide6.QtCore import Qt, Signal, QTimer
from pynput.keyboard import Controller
import pyperclip

from . import config_manager as config_manager
from . import CalculatorConstants as C
from . import Calculator

logger = logging.getLogger(__name__)

# Resolve project root depending on run mode (Script or .exe)
if getattr(sys, 'frozen', False):
    # We are running in a PyInstaller bundle (.exe)
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    # We are running in a normal Python environment (.py)
    PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Settings shown as a drop-down: key -> allowed values
CHOICE_SETTINGS = {
    "angle_unit": tuple(C.ANGLE_UNITS),
    "default_mode": Calculator.available_modes(),
    "default_base": tuple(C.BASES)
}


# -----------------------------
# Button layouts per mode
# -----------------------------
# (text, row, column)

STANDARD_BUTTONS = [
    ('MC', 0, 0), ('MR', 0, 1), ('M+', 0, 2), ('M-', 0, 3), ('MS', 0, 4),
    ('%', 1, 0), ('CE', 1, 1), ('C', 1, 2), ('backspace', 1, 3), ('÷', 1, 4),
    ('1/x', 2, 0), ('7', 2, 1), ('8', 2, 2), ('9', 2, 3), ('×', 2, 4),
    ('x²', 3, 0), ('4', 3, 1), ('5', 3, 2), ('6', 3, 3), ('-', 3, 4),
    ('√', 4, 0), ('1', 4, 1), ('2', 4, 2), ('3', 4, 3), ('+', 4, 4),
    ('(', 5, 0), (')', 5, 1), ('±', 5, 2), ('0', 5, 3), ('.', 5, 4),
    ('=', 6, 0, 1, 5)
]

SCIENTIFIC_BUTTONS = [
    ('DEG', 0, 0), ('RAD', 0, 1), ('GRAD', 0, 2), ('F-E', 0, 3), ('HYP', 0, 4), ('MS', 0, 5),
    ('sin', 1, 0), ('cos', 1, 1), ('tan', 1, 2), ('sin⁻¹', 1, 3), ('cos⁻¹', 1, 4), ('tan⁻¹', 1, 5),
    ('x²', 2, 0), ('x³', 2, 1), ('x^y', 2, 2), ('√', 2, 3), ('y√x', 2, 4), ('10ˣ', 2, 5),
    ('log', 3, 0), ('ln', 3, 1), ('log₂', 3, 2), ('eˣ', 3, 3), ('n!', 3, 4), ('mod', 3, 5),
    ('π', 4, 0), ('e', 4, 1), ('|x|', 4, 2), ('1/x', 4, 3), ('dms', 4, 4), ('deg', 4, 5),
    ('(', 5, 0), (')', 5, 1), (',', 5, 2), ('C', 5, 3), ('backspace', 5, 4), ('÷', 5, 5),
    ('rand', 6, 0), ('7', 6, 1), ('8', 6, 2), ('9', 6, 3), ('CE', 6, 4), ('×', 6, 5),
    ('MR', 7, 0), ('4', 7, 1), ('5', 7, 2), ('6', 7, 3), ('%', 7, 4), ('-', 7, 5),
    ('M+', 8, 0), ('1', 8, 1), ('2', 8, 2), ('3', 8, 3), ('±', 8, 4), ('+', 8, 5),
    ('M-', 9, 0), ('MC', 9, 1), ('0', 9, 2), ('.', 9, 3), ('=', 9, 4, 1, 2)
]

PROGRAMMER_BUTTONS = [
    ('A', 0, 0), ('<<', 0, 1), ('>>', 0, 2), ('CE', 0, 3), ('AC', 0, 4), ('backspace', 0, 5),
    ('B', 1, 0), ('(', 1, 1), (')', 1, 2), ('%', 1, 3), ('÷', 1, 4), ('MS', 1, 5),
    ('C', 2, 0), ('7', 2, 1), ('8', 2, 2), ('9', 2, 3), ('×', 2, 4), ('MR', 2, 5),
    ('D', 3, 0), ('4', 3, 1), ('5', 3, 2), ('6', 3, 3), ('-', 3, 4), ('M+', 3, 5),
    ('E', 4, 0), ('1', 4, 1), ('2', 4, 2), ('3', 4, 3), ('+', 4, 4), ('M-', 4, 5),
    ('F', 5, 0), ('±', 5, 1), ('0', 5, 2), ('MC', 5, 3), ('=', 5, 4, 1, 2)
]

MODE_BUTTONS = {
    "Standard": STANDARD_BUTTONS,
    "Scientific": SCIENTIFIC_BUTTONS,
    "Programmer": PROGRAMMER_BUTTONS
}

# Buttons that support "press and hold"
HOLD_BUTTONS = ['0', '1', '2', '3', '4', '5', '6', '7', '8', '9', 'backspace']

BUTTON_LABELS = {
    "backspace": "⌫"
}

# Keyboard -> token
KEY_TOKENS = {
    Qt.Key.Key_Enter: "=",
    Qt.Key.Key_Return: "=",
    Qt.Key.Key_Equal: "=",
    Qt.Key.Key_Backspace: "backspace",
    Qt.Key.Key_Escape: "AC",
    Qt.Key.Key_Delete: "CE",
    Qt.Key.Key_Asterisk: "×",
    Qt.Key.Key_Slash: "÷",
    Qt.Key.Key_Plus: "+",
    Qt.Key.Key_Minus: "-",
    Qt.Key.Key_ParenLeft: "(",
    Qt.Key.Key_ParenRight: ")",
    Qt.Key.Key_Period: ".",
    Qt.Key.Key_Comma: ",",
    Qt.Key.Key_Percent: "%"
}


def is_shift_pressed():
    """""

    Small and simple check, whether shift is pressed or not.
    Used for the "shift to copy" setting.

    """""

    keyboard_controller = Controller()
    return keyboard_controller.shift_pressed


class SettingsDialog(QtWidgets.QDialog):
    """""

    This class is responsible for managing the settings window, saving the new settings and opening an error
    message if something went wrong.

    All of the Settings can be separated into three categories:
    1. Checkboxes   (Managed with True or False)
    2. Input Fields (Managed as a number)
    3. Drop-downs   (One of a fixed set of strings)

    """""

    settings_saved = Signal()  # Signal to tell the main window to update

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}  # Dictionary, in which all of the Widgets (Setting options) are saved and stored.

        # --- 1. Window Setup ---
        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(360, 260)

        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        # --- 3. Build Widgets ---
        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value) or key_value

            # --- 3a. Checkbox Builder (for Boolean settings) ---
            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            # --- 3b. Drop-down Builder (for choice settings) ---
            elif key_value in CHOICE_SETTINGS:
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                combo = QtWidgets.QComboBox()
                combo.addItems(list(CHOICE_SETTINGS[key_value]))
                combo.setCurrentText(str(value))
                row_h_layout.addWidget(QtWidgets.QLabel(description + ":"))
                row_h_layout.addWidget(combo)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = combo

            # --- 3c. Input Field Builder (for Integer settings) ---
            elif isinstance(value, int):
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                label = QtWidgets.QLabel(description + " (min. 0):")
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

    def save_settings(self, setting_value_list):
        for key_value, widget in self.widgets.items():

            # --- 1. Checkboxes ---
            if isinstance(widget, QtWidgets.QCheckBox):
                setting_value_list[key_value] = widget.isChecked()

            # --- 2. Drop-downs ---
            elif isinstance(widget, QtWidgets.QComboBox):
                setting_value_list[key_value] = widget.currentText()

            # --- 3. Input Fields (like 'precision') ---
            elif isinstance(widget, QtWidgets.QLineEdit):
                new_value_str = widget.text().strip()
                if new_value_str == "":
                    continue  # Blank keeps the old value

                try:
                    new_value_int = int(new_value_str)
                    if new_value_int < 0:
                        raise ValueError(f"'{new_value_int}' is too small. Minimum is 0.")
                except ValueError as e:
                    # Show an error box and STOP the save process
                    logger.warning("Invalid settings input for %s: %s", key_value, e)
                    QtWidgets.QMessageBox.critical(self, "Invalid Input:",
                                                   f"Error in input for '{key_value}':\n\n{e}\n\nPlease correct your input.")
                    return
                setting_value_list[key_value] = new_value_int

        # --- 4. Write to File ---
        saved_settings = config_manager.save_setting(setting_value_list)

        if saved_settings != {}:
            self.settings_saved.emit()
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           "Settings could not be saved (error in config_manager).")

    def update_darkmode(self):
        # Applies the darkmode stylesheet if the setting is True
        if self.setting_value_list.get("darkmode"):
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QComboBox {background-color: #444444;color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class CalculatorWindow(QtWidgets.QWidget):
    initial_delay = 500
    repeat_interval = 100

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Instance State Variables ---
        self.shift_is_held = False
        self.was_held = False
        self.held_button_value = None
        self.hold_timer = QTimer(self)
        self.hold_timer.timeout.connect(self.handle_hold_tick)
        self.button_objects = {}
        self.base_buttons = {}
        self.last_result = ""

        # --- 3. Window Setup ---
        icon_path = PROJECT_ROOT / "icons" / "icon.png"
        if icon_path.exists():
            self.setWindowIcon(QtGui.QIcon(str(icon_path)))
        self.setWindowTitle("MultiCalc")
        self.resize(420, 620)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        # --- 4. Top Bar: mode selector + settings ---
        top_bar = QtWidgets.QHBoxLayout()
        self.mode_selector = QtWidgets.QComboBox()
        self.mode_selector.addItems(list(Calculator.available_modes()))
        settings_button = QtWidgets.QPushButton("⚙")
        settings_button.clicked.connect(self.open_settings)
        top_bar.addWidget(self.mode_selector, 1)
        top_bar.addWidget(settings_button)
        main_v_layout.addLayout(top_bar)

        # --- 5. Display Setup ---
        self.display = QtWidgets.QLineEdit("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        font = self.display.font()
        font.setPointSize(28)
        self.display.setFont(font)
        main_v_layout.addWidget(self.display)

        self.preview = QtWidgets.QLabel("0")
        self.preview.setAlignment(Qt.AlignmentFlag.AlignRight)
        main_v_layout.addWidget(self.preview)

        self.status = QtWidgets.QLabel("")
        self.status.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.status.setStyleSheet("color: #d9534f;")
        main_v_layout.addWidget(self.status)

        # --- 6. Base panel (Programmer only) ---
        self.base_panel = QtWidgets.QWidget()
        base_layout = QtWidgets.QGridLayout(self.base_panel)
        base_layout.setContentsMargins(0, 0, 0, 0)
        for row, base in enumerate(C.BASE_ORDER):
            button = QtWidgets.QPushButton(base)
            button.setCheckable(True)
            button.clicked.connect(lambda checked=False, val=base: self.handle_button_press(val))
            value_label = QtWidgets.QLabel("0")
            value_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
            base_layout.addWidget(button, row, 0)
            base_layout.addWidget(value_label, row, 1)
            base_layout.setColumnStretch(1, 1)
            self.base_buttons[base] = (button, value_label)
        main_v_layout.addWidget(self.base_panel)

        # --- 7. Button Grid Container ---
        self.button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(self.button_container, 3)
        self.button_grid = QtWidgets.QGridLayout(self.button_container)
        self.button_grid.setSpacing(0)
        self.button_grid.setContentsMargins(0, 0, 0, 0)

        # --- 8. Start in the configured mode ---
        start_mode = self.setting_value_list.get("default_mode", "Standard")
        if start_mode not in Calculator.available_modes():
            start_mode = "Standard"
        self.mode_selector.setCurrentText(start_mode)
        self.mode_selector.currentTextChanged.connect(self.switch_mode)
        self.switch_mode(start_mode)

    # --- Mode handling ---
    def switch_mode(self, mode):
        """Replace the engine (state is discarded) and rebuild the button grid."""
        self.calculator = Calculator.create_calculator(mode, settings=self.setting_value_list)
        self.build_buttons(MODE_BUTTONS[mode])
        self.base_panel.setVisible(Calculator.is_programmer_variant(self.calculator))
        self.render(self.calculator.create_response())

    def build_buttons(self, layout):
        # Remove the buttons of the previous mode
        while self.button_grid.count():
            item = self.button_grid.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self.button_objects = {}

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        for entry in layout:
            text, row, col = entry[:3]
            row_span, col_span = entry[3:] if len(entry) > 3 else (1, 1)
            button = QtWidgets.QPushButton(BUTTON_LABELS.get(text, text))
            button.setSizePolicy(expanding_policy)

            if text in HOLD_BUTTONS:
                button.pressed.connect(lambda val=text: self.handle_button_pressed_hold(val))
                button.released.connect(self.handle_button_released_hold)
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_clicked_hold(val))
            else:
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))

            self.button_grid.addWidget(button, row, col, row_span, col_span)
            self.button_objects[text] = button

        self.update_darkmode()

    # --- Button Hold Logic ---
    def handle_button_pressed_hold(self, value):
        self.was_held = False
        self.held_button_value = value
        self.hold_timer.setInterval(self.initial_delay)
        self.hold_timer.start()

    def handle_button_released_hold(self):
        self.hold_timer.stop()
        self.held_button_value = None

    def handle_button_clicked_hold(self, value):
        # A click after a hold must not fire once more
        if not self.was_held:
            self.handle_button_press(value)

    def handle_hold_tick(self):
        self.was_held = True
        if self.hold_timer.interval() == self.initial_delay:
            self.hold_timer.setInterval(self.repeat_interval)
        if self.held_button_value:
            self.handle_button_press(self.held_button_value)

    # --- Key Event Handlers ---
    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            self.shift_is_held = True
            return super().keyPressEvent(event)

        token = KEY_TOKENS.get(event.key())
        if token is None:
            text = event.text()
            if text and (text.isdigit() or text.upper() in C.HEX_LETTERS):
                token = text.upper() if Calculator.is_programmer_variant(self.calculator) else text
        if token is not None:
            self.handle_button_press(token)
            return
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            self.shift_is_held = False
        super().keyReleaseEvent(event)

    # --- Dispatch ---
    def handle_button_press(self, value):
        response = self.calculator.handle_button_click(value)
        self.render(response)

        if value == "=" and response.get("success"):
            self.last_result = response.get("result", "")
            if self.setting_value_list.get("shift_to_copy") and (self.shift_is_held or is_shift_pressed()):
                pyperclip.copy(self.last_result)

    def render(self, response):
        self.display.setText(response["input"])
        self.preview.setText(response.get("display", ""))
        self.status.setText(response.get("error", ""))

        if "display_values" in response:
            active_base = response.get("active_base")
            for base, (button, value_label) in self.base_buttons.items():
                value_label.setText(response["display_values"][base]["display"])
                button.setChecked(base == active_base)

        if Calculator.is_scientific_variant(self.calculator):
            for token in C.ANGLE_MODES:
                button = self.button_objects.get(token)
                if button:
                    button.setStyleSheet("font-weight: bold;" if token == response.get("angle_mode") else "")
            hyp = self.button_objects.get("HYP")
            if hyp:
                hyp.setStyleSheet("font-weight: bold;" if response.get("hyperbolic") else "")

    # --- Theme ---
    def update_darkmode(self):
        if self.setting_value_list.get("darkmode"):
            for button in self.button_objects.values():
                button.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            self.setStyleSheet("background-color: #121212; color: white;")
            self.display.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
        else:
            for button in self.button_objects.values():
                button.setStyleSheet("font-weight: normal;")
            self.setStyleSheet("")
            self.display.setStyleSheet("font-weight: bold;")

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # "exec" makes the dialog modal (blocks main window)

        # Reload settings after dialog closes; a fresh engine picks them up
        self.setting_value_list = config_manager.load_setting_value("all")
        self.update_darkmode()
        self.switch_mode(self.mode_selector.currentText())


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
