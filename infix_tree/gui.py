"""PyQt6 GUI for the infix expression tree builder.

Run with:
    python -m infix_tree.gui

Type one space-separated expression per line, pick an operator ordering
(inline or from a rules.yaml) and build the trees. The last tree is also
shown as an expandable outline; the rendered text can be saved to a file.
"""
from __future__ import annotations
import sys
import re
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QPlainTextEdit, QLabel, QFileDialog, QMessageBox,
    QSplitter, QLineEdit, QComboBox, QTreeWidget, QTreeWidgetItem
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QFont, QTextCharFormat, QSyntaxHighlighter, QShortcut, QKeySequence

from infix_tree.converter.rules import RulesError, load_operator_order, parse_operator_order
from infix_tree.converter.translator import FORMATS, convert_lines, save_output
from infix_tree.parser.ast_builder import Grouped, Leaf, Node, Operator, count_nodes
from infix_tree.parser.infix_parser import MalformedExpression, Parser

logger = logging.getLogger(__name__)

STYLE = """
QMainWindow, QWidget { background-color: #1e1e1e; color: #d4d4d4; }
QPlainTextEdit, QLineEdit, QComboBox, QTreeWidget {
    background-color: #252526;
    border: 1px solid #3e3e3e;
    border-radius: 4px;
    padding: 4px;
}
QPushButton {
    background-color: #2d2d30;
    border: 1px solid #3e3e3e;
    border-radius: 4px;
    padding: 6px 14px;
}
QPushButton:hover { background-color: #3e3e3e; }
QPushButton#primary { background-color: #0e639c; color: white; border: none; }
QLabel#status { color: #808080; font-size: 11px; }
"""


class TokenHighlighter(QSyntaxHighlighter):
    """Colours registered operators, parentheses and placeholders."""
    def __init__(self, parent=None, operators: Iterable[str] = ()):
        super().__init__(parent)
        self.formats = {}
        for kind, color, bold in (('operator', (86, 156, 214), True),
                                  ('paren', (220, 220, 170), False),
                                  ('placeholder', (106, 153, 85), False)):
            fmt = QTextCharFormat()
            fmt.setForeground(QColor(*color))
            if bold:
                fmt.setFontWeight(600)
            self.formats[kind] = fmt
        self.operators = set()
        self.set_operators(operators)

    def set_operators(self, operators: Iterable[str]) -> None:
        self.operators = set(operators)
        self.rehighlight()

    def token_kind(self, token: str) -> Optional[str]:
        if token in ('(', ')'):
            return 'paren'
        if token in self.operators:
            return 'operator'
        if token == '_':
            return 'placeholder'
        return None

    def highlightBlock(self, text):
        # tokens are whitespace separated
        for match in re.finditer(r'\S+', text):
            kind = self.token_kind(match.group())
            if kind:
                start, end = match.span()
                self.setFormat(start, end - start, self.formats[kind])


def tree_item(node: Node) -> QTreeWidgetItem:
    """Build an outline item (and its children) for one tree node."""
    if isinstance(node, Operator):
        item = QTreeWidgetItem([node.label, 'operator'])
        item.addChildren([tree_item(node.left), tree_item(node.right)])
    elif isinstance(node, Grouped):
        item = QTreeWidgetItem(['( )', 'group'])
        item.addChild(tree_item(node.inner))
    elif isinstance(node, Leaf):
        item = QTreeWidgetItem([node.token, 'operand'])
    else:
        item = QTreeWidgetItem(['_', 'placeholder'])
    return item


class InfixTreeApp(QMainWindow):
    def __init__(self, config_file: Optional[Path] = None):
        super().__init__()
        self.output_path: Optional[str] = None
        self.rules_path: Optional[str] = None
        self.config_file = config_file or Path(__file__).resolve().parent.parent / "infix_tree_config.json"
        self._config_loaded = False
        self.init_ui()
        self.load_config()
        self._config_loaded = True

    def save_config(self) -> None:
        if not self._config_loaded:
            return
        config = {
            "rules_path": self.rules_path,
            "operators": self.operators_edit.text(),
            "format": self.format_combo.currentText(),
        }
        try:
            self.config_file.write_text(json.dumps(config, indent=2), encoding='utf-8')
        except OSError as e:
            logger.warning("could not save GUI config to %s: %s", self.config_file, e)

    def load_config(self) -> None:
        if not self.config_file.exists():
            return
        try:
            config = json.loads(self.config_file.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            logger.warning("ignoring unreadable GUI config %s: %s", self.config_file, e)
            return
        if config.get("rules_path") and Path(config["rules_path"]).exists():
            self.rules_path = config["rules_path"]
            self.rules_label.setText(Path(self.rules_path).name)
        if config.get("operators"):
            self.operators_edit.setText(config["operators"])
        if config.get("format") in FORMATS:
            self.format_combo.setCurrentText(config["format"])

    def init_ui(self):
        self.setWindowTitle('Infix Tree Builder')
        self.resize(1100, 650)
        self.setStyleSheet(STYLE)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        toolbar = QHBoxLayout()
        toolbar.addWidget(QLabel("Operators:"))
        self.operators_edit = QLineEdit()
        self.operators_edit.setPlaceholderText("loosest first, e.g. + - * /  (empty: use rules)")
        self.operators_edit.textChanged.connect(self.on_operators_changed)
        toolbar.addWidget(self.operators_edit, stretch=1)
        self.rules_label = QLabel("default rules")
        toolbar.addWidget(self.rules_label)
        self.format_combo = QComboBox()
        self.format_combo.addItems(list(FORMATS))
        self.format_combo.currentTextChanged.connect(lambda _: self.save_config())
        toolbar.addWidget(self.format_combo)
        for text, slot, primary in (("Load Rules", self.load_rules, False),
                                    ("Load File", self.load_input_file, False),
                                    ("Build Tree", self.convert, True),
                                    ("Save Output", self.save_output_file, False)):
            button = QPushButton(text)
            if primary:
                button.setObjectName("primary")
            button.clicked.connect(slot)
            toolbar.addWidget(button)
        layout.addLayout(toolbar)

        mono = QFont("Consolas", 11)
        mono.setStyleHint(QFont.StyleHint.Monospace)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        self.input_editor = QPlainTextEdit()
        self.input_editor.setFont(mono)
        self.input_editor.setPlaceholderText("One expression per line, e.g. ( 1 + 2 ) * 3")
        self.highlighter = TokenHighlighter(self.input_editor.document(), self.current_operators_or_empty())
        splitter.addWidget(self.input_editor)

        self.output_editor = QPlainTextEdit()
        self.output_editor.setFont(mono)
        self.output_editor.setReadOnly(True)
        splitter.addWidget(self.output_editor)

        self.tree_view = QTreeWidget()
        self.tree_view.setHeaderLabels(["Token", "Node"])
        splitter.addWidget(self.tree_view)
        layout.addWidget(splitter, stretch=1)

        QShortcut(QKeySequence("Ctrl+Return"), self).activated.connect(self.convert)

        self.status_label = QLabel("Ready")
        self.status_label.setObjectName("status")
        layout.addWidget(self.status_label)

    def current_operators(self) -> List[str]:
        """Inline operators if any were typed, else the loaded (or default) rules."""
        return parse_operator_order(self.operators_edit.text()) or load_operator_order(self.rules_path)

    def current_operators_or_empty(self) -> List[str]:
        try:
            return self.current_operators()
        except (OSError, RulesError) as e:
            logger.warning("no operators for highlighting: %s", e)
            return []

    def on_operators_changed(self, _text: str) -> None:
        if hasattr(self, 'highlighter'):
            self.highlighter.set_operators(self.current_operators_or_empty())
        self.save_config()

    def load_input_file(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, 'Select expressions file', '', 'Text files (*.txt);;All files (*.*)')
        if not path:
            return
        try:
            self.input_editor.setPlainText(Path(path).read_text(encoding='utf-8'))
            self.status_label.setText(f"Loaded: {Path(path).name}")
        except OSError as e:
            QMessageBox.critical(self, 'Error', f'Failed to read input file:\n{e}')

    def load_rules(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, 'Select rules.yaml', '', 'YAML files (*.yaml *.yml);;All files (*.*)')
        if path:
            self.set_rules_path(path)

    def set_rules_path(self, path: str) -> bool:
        try:
            operators = load_operator_order(path)
        except (OSError, RulesError) as e:
            QMessageBox.critical(self, 'Rules Error', f'Failed to load rules file:\n{e}')
            return False
        self.rules_path = path
        self.rules_label.setText(Path(path).name)
        self.highlighter.set_operators(self.current_operators_or_empty())
        self.save_config()
        self.status_label.setText(f"Loaded rules: {Path(path).name} ({len(operators)} operators)")
        return True

    def convert(self) -> None:
        src = self.input_editor.toPlainText()
        lines = [line for line in src.splitlines() if line.strip()]
        if not lines:
            QMessageBox.information(self, 'Empty Input', 'No expression found. Type or load one.')
            return
        try:
            operators = self.current_operators()
            out = convert_lines(src, operators=operators, fmt=self.format_combo.currentText())
            last = Parser(operators).parse(lines[-1].split())
        except MalformedExpression as e:
            self.status_label.setText("Malformed expression")
            QMessageBox.critical(self, 'Malformed Expression', f'Could not build a tree:\n{e.reason}')
            return
        except (OSError, RulesError) as e:
            QMessageBox.critical(self, 'Rules Error', f'Could not load operators:\n{e}')
            return
        self.output_editor.setPlainText(out)
        self.tree_view.clear()
        self.tree_view.addTopLevelItem(tree_item(last))
        self.tree_view.expandAll()
        counts = count_nodes(last)
        self.status_label.setText(
            f"Built {len(lines)} tree(s); last: {counts['Operator']} operators, "
            f"{counts['Leaf']} operands, {counts['Placeholder']} placeholders"
        )

    def save_output_file(self) -> None:
        if not self.output_path:
            path, _ = QFileDialog.getSaveFileName(self, 'Save output', '', 'All files (*.*)')
            if not path:
                return
            self.output_path = path
        try:
            save_output(self.output_editor.toPlainText(), self.output_path)
            self.status_label.setText(f"Saved: {Path(self.output_path).name}")
        except OSError as e:
            QMessageBox.critical(self, 'Save Error', f'Failed to save output:\n{e}')


def run_gui() -> None:
    app = QApplication(sys.argv)
    app.setStyle('Fusion')
    window = InfixTreeApp()
    window.show()
    sys.exit(app.exec())


if __name__ == '__main__':
    run_gui()
