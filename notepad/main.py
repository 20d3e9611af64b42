from __future__ import annotations

import logging
import os
import sys

from PySide6.QtCore import QTimer, Qt
from PySide6.QtGui import QFont, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QApplication,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QSplitter,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from notepad.autosave import AutosaveConfig, AutosaveScheduler
from notepad.bridge import NoteBridge
from notepad.errors import StorageUnavailable
from notepad.formatting import count_chars, count_words, plural
from notepad.settings import FONT_FAMILIES, AppSettings, default_data_dir
from notepad.storage import FileBlobStore
from notepad.store import NoteStore


FONT_SIZES = [12, 14, 16, 18, 20, 24]


class NotepadWindow(QMainWindow):
    def __init__(self, bridge: NoteBridge, settings: AppSettings) -> None:
        super().__init__()
        self._bridge = bridge
        self._settings = settings
        self._current_id: str | None = None
        self._rendering = False
        self.setWindowTitle("Notepad")
        data = settings.get_settings()
        self.resize(int(data["window_width"]), int(data["window_height"]))

        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search notes...")
        self.search_input.textChanged.connect(self._bridge.setSearchQuery)
        self.new_btn = QPushButton("New Note")
        self.new_btn.clicked.connect(self._bridge.createNote)
        self.notes_list = QListWidget()
        self.notes_list.itemClicked.connect(self._on_item_clicked)
        self.empty_label = QLabel()
        self.empty_label.setWordWrap(True)
        self.empty_label.hide()

        sidebar_layout = QVBoxLayout()
        sidebar_layout.addWidget(self.new_btn)
        sidebar_layout.addWidget(self.search_input)
        sidebar_layout.addWidget(self.notes_list)
        sidebar_layout.addWidget(self.empty_label)
        self.sidebar = QWidget()
        self.sidebar.setLayout(sidebar_layout)
        self.sidebar.setVisible(bool(data["sidebar_visible"]))

        self.toggle_btn = QPushButton("Sidebar")
        self.toggle_btn.clicked.connect(self.toggle_sidebar)
        self.font_size_box = QComboBox()
        for size in FONT_SIZES:
            self.font_size_box.addItem(f"{size}px", size)
        self.font_family_box = QComboBox()
        self.font_family_box.addItems(FONT_FAMILIES)
        self.save_btn = QPushButton("Save")
        self.save_btn.clicked.connect(lambda: self._bridge.saveNote(False))
        self.delete_btn = QPushButton("Delete")
        self.delete_btn.clicked.connect(self.confirm_delete)

        toolbar = QHBoxLayout()
        toolbar.addWidget(self.toggle_btn)
        toolbar.addStretch(1)
        toolbar.addWidget(self.font_size_box)
        toolbar.addWidget(self.font_family_box)
        toolbar.addWidget(self.save_btn)
        toolbar.addWidget(self.delete_btn)

        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("Note title")
        self.title_input.textEdited.connect(self._bridge.updateTitle)
        self.content_edit = QPlainTextEdit()
        self.content_edit.textChanged.connect(self._on_content_changed)

        self.word_label = QLabel()
        self.char_label = QLabel()
        self.status_label = QLabel()
        footer = QHBoxLayout()
        footer.addWidget(self.word_label)
        footer.addWidget(self.char_label)
        footer.addStretch(1)
        footer.addWidget(self.status_label)

        editor_layout = QVBoxLayout()
        editor_layout.addLayout(toolbar)
        editor_layout.addWidget(self.title_input)
        editor_layout.addWidget(self.content_edit)
        editor_layout.addLayout(footer)
        editor_page = QWidget()
        editor_page.setLayout(editor_layout)

        welcome_btn = QPushButton("Create your first note")
        welcome_btn.clicked.connect(self._bridge.createNote)
        welcome_label = QLabel("Select a note or create a new one to get started.")
        welcome_label.setAlignment(Qt.AlignCenter)
        welcome_layout = QVBoxLayout()
        welcome_layout.addStretch(1)
        welcome_layout.addWidget(welcome_label)
        welcome_layout.addWidget(welcome_btn, 0, Qt.AlignCenter)
        welcome_layout.addStretch(1)
        welcome_page = QWidget()
        welcome_page.setLayout(welcome_layout)

        self.pages = QStackedWidget()
        self.pages.addWidget(welcome_page)
        self.pages.addWidget(editor_page)

        splitter = QSplitter()
        splitter.addWidget(self.sidebar)
        splitter.addWidget(self.pages)
        splitter.setStretchFactor(1, 1)
        self.setCentralWidget(splitter)

        self._load_font_settings(data)
        self.font_size_box.currentIndexChanged.connect(self._on_font_changed)
        self.font_family_box.currentIndexChanged.connect(self._on_font_changed)

        QShortcut(QKeySequence("Ctrl+S"), self, activated=lambda: self._bridge.saveNote(False))
        QShortcut(QKeySequence("Ctrl+N"), self, activated=self._bridge.createNote)
        QShortcut(QKeySequence("Ctrl+F"), self, activated=self.search_input.setFocus)

        self._bridge.listUpdated.connect(self.render_list)
        self._bridge.editorUpdated.connect(self.render_editor)
        self._bridge.welcomeRequested.connect(self.render_welcome)
        self._bridge.statusUpdated.connect(self.status_label.setText)
        self._bridge.confirmationRequested.connect(lambda pending: QTimer.singleShot(0, lambda: self.ask_unsaved_changes(pending)))
        self._bridge.storageError.connect(self.show_storage_error)
        self._bridge.noteSaved.connect(lambda _note_id: self.statusBar().showMessage("Note saved successfully!", 3000))

    def render_state(self, payload: dict) -> None:
        self.render_list(payload["notes"])
        if payload["current"] is None:
            self.render_welcome()
        else:
            self.render_editor(payload["current"])
        self.status_label.setText(payload["status"])

    def render_list(self, notes: list) -> None:
        self.notes_list.clear()
        for item in notes:
            entry = QListWidgetItem(f"{item['title']}\n{item['preview']}\n{item['date']}")
            entry.setData(Qt.UserRole, item["id"])
            self.notes_list.addItem(entry)
            if item["active"]:
                entry.setSelected(True)
        if notes:
            self.empty_label.hide()
        else:
            self.empty_label.setText(self._bridge.getState()["emptyMessage"])
            self.empty_label.show()

    def render_editor(self, note: dict) -> None:
        self._rendering = True
        try:
            self._current_id = note["id"]
            self.title_input.setText(note["title"])
            self.content_edit.setPlainText(note["content"])
        finally:
            self._rendering = False
        self.word_label.setText(note["words"])
        self.char_label.setText(note["chars"])
        self.pages.setCurrentIndex(1)

    def render_welcome(self) -> None:
        self._current_id = None
        self.pages.setCurrentIndex(0)

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        note_id = item.data(Qt.UserRole)
        if note_id:
            self._bridge.selectNote(str(note_id))

    def _on_content_changed(self) -> None:
        if self._rendering:
            return
        text = self.content_edit.toPlainText()
        self.word_label.setText(plural(count_words(text), "word"))
        self.char_label.setText(plural(count_chars(text), "character"))
        self._bridge.updateContent(text)

    def ask_unsaved_changes(self, pending: dict) -> None:
        box = QMessageBox(self)
        box.setIcon(QMessageBox.Warning)
        box.setWindowTitle("Unsaved Changes")
        box.setText("You have unsaved changes. What would you like to do?")
        save_btn = box.addButton("Save and Continue", QMessageBox.AcceptRole)
        discard_btn = box.addButton("Discard Changes", QMessageBox.DestructiveRole)
        box.addButton("Cancel", QMessageBox.RejectRole)
        box.exec()
        clicked = box.clickedButton()
        if clicked is save_btn:
            choice = "save"
        elif clicked is discard_btn:
            choice = "discard"
        else:
            choice = "cancel"
        logging.info("unsaved changes dialog: %s -> %s", pending, choice)
        self._bridge.resolveConfirmation(choice)

    def confirm_delete(self) -> None:
        if not self._current_id:
            return
        answer = QMessageBox.question(
            self,
            "Delete Note",
            "Are you sure you want to delete this note? This action cannot be undone.",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        if answer == QMessageBox.Yes:
            self._bridge.deleteNote(self._current_id)

    def show_storage_error(self, message: str) -> None:
        QMessageBox.warning(self, "Storage Error", f"Your changes could not be saved.\n{message}")

    def toggle_sidebar(self) -> None:
        visible = not self.sidebar.isVisible()
        self.sidebar.setVisible(visible)
        self._settings.set_settings({"sidebar_visible": visible})

    def _load_font_settings(self, data: dict) -> None:
        size_index = self.font_size_box.findData(int(data["font_size"]))
        self.font_size_box.setCurrentIndex(max(0, size_index))
        family_index = self.font_family_box.findText(str(data["font_family"]))
        self.font_family_box.setCurrentIndex(max(0, family_index))
        self._apply_font()

    def _apply_font(self) -> None:
        size = int(self.font_size_box.currentData() or 16)
        self.content_edit.setFont(QFont(self.font_family_box.currentText(), size))

    def _on_font_changed(self, _index: int) -> None:
        self._apply_font()
        self._settings.set_settings(
            {
                "font_size": int(self.font_size_box.currentData() or 16),
                "font_family": self.font_family_box.currentText(),
            }
        )

    def closeEvent(self, event) -> None:
        warning = self._bridge.exitWarning()
        if warning:
            answer = QMessageBox.question(self, "Unsaved Changes", warning, QMessageBox.Yes | QMessageBox.No, QMessageBox.No)
            if answer != QMessageBox.Yes:
                logging.info("close cancelled: unsaved changes")
                event.ignore()
                return
        self._settings.set_settings({"window_width": self.width(), "window_height": self.height()})
        logging.info("app close")
        event.accept()


def main() -> None:
    data_dir = default_data_dir()
    os.makedirs(data_dir, exist_ok=True)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(os.path.join(data_dir, "app.log"), encoding="utf-8"),
            logging.StreamHandler(sys.stdout),
        ],
    )
    logging.info("app start: data_dir=%s", data_dir)

    app = QApplication(sys.argv)
    settings = AppSettings(os.path.join(data_dir, "settings.json"))
    try:
        store = NoteStore(FileBlobStore(data_dir))
    except StorageUnavailable as exc:
        logging.exception("note storage unavailable: %s", exc)
        QMessageBox.critical(None, "Notepad", f"Notes could not be loaded.\n{exc}")
        sys.exit(1)

    bridge = NoteBridge(store)
    window = NotepadWindow(bridge, settings)
    window.render_state(bridge.getState())
    window.show()

    scheduler = AutosaveScheduler(AutosaveConfig.from_settings(settings.get_settings()))

    def tick() -> None:
        if scheduler.update():
            bridge.autosaveTick()

    timer = QTimer()
    timer.timeout.connect(tick)
    timer.start(1000)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
