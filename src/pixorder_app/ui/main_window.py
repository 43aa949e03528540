# ui/main_window.py
"""
Main application window for PixOrder.

Source and target folder pickers, operation mode, conflict policy and
subfolder toggle, Start / Pause-Resume / Cancel controls, progress bar and
log view. All classification work happens on a ClassifyWorker thread.
"""

import os
from typing import Optional

from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFileDialog,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pixorder_app.core.metadata import check_dependencies
from pixorder_app.core.results import (
    ClassificationMode,
    ClassificationOptions,
    ClassificationSummary,
    ConflictResolution,
)
from pixorder_app.core.rules import RuleSet
from pixorder_app.core.worker import ClassifyWorker
from .log_viewer import LogViewer

NO_FOLDER_TEXT = "No folder selected"
SAME_AS_SOURCE_TEXT = "Same as source folder"

MODE_CHOICES = [
    ("Copy", ClassificationMode.COPY),
    ("Move", ClassificationMode.MOVE),
    ("Preview Only (Dry Run)", ClassificationMode.DRY_RUN),
]

CONFLICT_CHOICES = [
    ("Rename (name_1.ext)", ConflictResolution.RENAME),
    ("Skip", ConflictResolution.SKIP),
    ("Overwrite", ConflictResolution.OVERWRITE),
]

BUTTON_STYLE = """
    QPushButton {{
        background-color: {color};
        color: #F0F7F4;
        border: none;
        border-radius: 8px;
        padding: 10px 24px;
        font-size: 14px;
    }}
    QPushButton:disabled {{
        background-color: #3a3f3b;
        color: #7E8D85;
    }}
"""


class MainWindow(QMainWindow):
    """Main application window for the PixOrder media organizer."""

    def __init__(self, rule_set: Optional[RuleSet] = None, log_to_file: bool = False):
        super().__init__()

        self.rule_set = rule_set or RuleSet.default()
        self.log_to_file = log_to_file

        self.setWindowTitle("PixOrder - Media File Organizer")
        self.setMinimumSize(720, 640)

        self.worker: Optional[ClassifyWorker] = None
        self.source_folder: Optional[str] = None
        self.target_folder: Optional[str] = None
        self._paused = False
        self._mode = ClassificationMode.COPY

        self._setup_ui()
        self._connect_signals()
        self._check_external_tools()

    def _check_external_tools(self) -> None:
        """Warn when video dimensions cannot be read."""
        missing = check_dependencies()
        if missing:
            self.log_viewer.log(
                f"Optional tools not found: {', '.join(missing)} - "
                "video files may fail to classify (brew install exiftool mediainfo)",
                "warning",
            )

    def _setup_ui(self) -> None:
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        central_widget.setStyleSheet("background-color: #3C493F; color: #F0F7F4;")

        main_layout = QVBoxLayout(central_widget)
        main_layout.setSpacing(16)
        main_layout.setContentsMargins(24, 24, 24, 24)

        # === Header ===
        title = QLabel("PixOrder")
        title.setStyleSheet("font-size: 32px; font-weight: 200;")
        title.setAlignment(Qt.AlignCenter)
        subtitle = QLabel("Media File Organizer")
        subtitle.setStyleSheet("font-size: 13px; color: #A2E3C4;")
        subtitle.setAlignment(Qt.AlignCenter)
        main_layout.addWidget(title)
        main_layout.addWidget(subtitle)

        # === Folders and options ===
        card = QFrame()
        card.setStyleSheet(
            """
            QFrame {
                background-color: #4a574d;
                border-radius: 12px;
            }
        """
        )
        grid = QGridLayout(card)
        grid.setContentsMargins(16, 12, 16, 12)
        grid.setVerticalSpacing(10)

        self.source_label = QLabel(NO_FOLDER_TEXT)
        self.browse_source_btn = QPushButton("Browse...")
        grid.addWidget(QLabel("Source Folder"), 0, 0)
        grid.addWidget(self.source_label, 0, 1)
        grid.addWidget(self.browse_source_btn, 0, 2)

        self.target_label = QLabel(SAME_AS_SOURCE_TEXT)
        self.browse_target_btn = QPushButton("Browse...")
        self.clear_target_btn = QPushButton("Clear")
        target_buttons = QHBoxLayout()
        target_buttons.addWidget(self.browse_target_btn)
        target_buttons.addWidget(self.clear_target_btn)
        grid.addWidget(QLabel("Target Folder"), 1, 0)
        grid.addWidget(self.target_label, 1, 1)
        grid.addLayout(target_buttons, 1, 2)

        self.mode_combo = QComboBox()
        for label, _ in MODE_CHOICES:
            self.mode_combo.addItem(label)
        grid.addWidget(QLabel("Operation"), 2, 0)
        grid.addWidget(self.mode_combo, 2, 1, 1, 2)

        self.conflict_combo = QComboBox()
        for label, _ in CONFLICT_CHOICES:
            self.conflict_combo.addItem(label)
        grid.addWidget(QLabel("If file exists"), 3, 0)
        grid.addWidget(self.conflict_combo, 3, 1, 1, 2)

        self.subfolders_cb = QCheckBox("Include subfolders")
        grid.addWidget(self.subfolders_cb, 4, 0, 1, 3)

        grid.setColumnStretch(1, 1)
        main_layout.addWidget(card)

        # === Progress ===
        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setValue(0)
        self.status_label = QLabel("")
        self.status_label.setStyleSheet("font-size: 12px; color: #B3BFB8;")
        main_layout.addWidget(self.progress_bar)
        main_layout.addWidget(self.status_label)

        # === Log ===
        self.log_viewer = LogViewer()
        main_layout.addWidget(self.log_viewer, 1)

        # === Buttons ===
        button_layout = QHBoxLayout()
        button_layout.addStretch()

        self.cancel_btn = QPushButton("Cancel")
        self.cancel_btn.setStyleSheet(BUTTON_STYLE.format(color="#7E8D85"))
        self.cancel_btn.setVisible(False)

        self.start_btn = QPushButton("Start")
        self.start_btn.setStyleSheet(BUTTON_STYLE.format(color="#2f8f66"))

        button_layout.addWidget(self.cancel_btn)
        button_layout.addWidget(self.start_btn)
        main_layout.addLayout(button_layout)

    def _connect_signals(self) -> None:
        """Connect widget signals to slots."""
        self.browse_source_btn.clicked.connect(self._browse_source)
        self.browse_target_btn.clicked.connect(self._browse_target)
        self.clear_target_btn.clicked.connect(self._clear_target)
        self.start_btn.clicked.connect(self._start_or_toggle_pause)
        self.cancel_btn.clicked.connect(self._cancel_processing)

    @Slot()
    def _browse_source(self) -> None:
        folder = QFileDialog.getExistingDirectory(
            self,
            "Select Source Folder to Organize",
            os.path.expanduser("~"),
        )
        if folder:
            self.source_folder = folder
            self.source_label.setText(folder)
            self.log_viewer.log(f"Selected source folder: {folder}", "info")

    @Slot()
    def _browse_target(self) -> None:
        folder = QFileDialog.getExistingDirectory(
            self,
            "Select Target Folder for Organized Files",
            self.source_folder or os.path.expanduser("~"),
        )
        if folder:
            self.target_folder = folder
            self.target_label.setText(folder)
            self.log_viewer.log(f"Selected target folder: {folder}", "info")

    @Slot()
    def _clear_target(self) -> None:
        self.target_folder = None
        self.target_label.setText(SAME_AS_SOURCE_TEXT)

    def _toggle_controls(self, processing: bool) -> None:
        """Toggle UI controls based on processing state."""
        for widget in (
            self.browse_source_btn,
            self.browse_target_btn,
            self.clear_target_btn,
            self.mode_combo,
            self.conflict_combo,
            self.subfolders_cb,
        ):
            widget.setEnabled(not processing)

        self.cancel_btn.setVisible(processing)
        self._paused = False
        self._update_start_button(processing)

    def _update_start_button(self, processing: bool) -> None:
        if not processing:
            self.start_btn.setText("Start")
            self.start_btn.setStyleSheet(BUTTON_STYLE.format(color="#2f8f66"))
        elif self._paused:
            self.start_btn.setText("Resume")
            self.start_btn.setStyleSheet(BUTTON_STYLE.format(color="#2f8f66"))
        else:
            self.start_btn.setText("Pause")
            self.start_btn.setStyleSheet(BUTTON_STYLE.format(color="#3C493F"))

    def _current_options(self) -> ClassificationOptions:
        mode = MODE_CHOICES[self.mode_combo.currentIndex()][1]
        conflict = CONFLICT_CHOICES[self.conflict_combo.currentIndex()][1]
        return ClassificationOptions(mode=mode, conflict_resolution=conflict)

    @Slot()
    def _start_or_toggle_pause(self) -> None:
        if self.worker is not None and self.worker.isRunning():
            self._toggle_pause()
            return
        self._start_processing()

    def _start_processing(self) -> None:
        """Start a classification run on a worker thread."""
        if not self.source_folder:
            QMessageBox.warning(
                self,
                "No Folder Selected",
                "Please select a source folder to organize.",
            )
            return

        options = self._current_options()
        self._mode = options.mode

        self._toggle_controls(processing=True)
        self.progress_bar.setValue(0)
        self.status_label.setText(
            "Scanning media files in folder and subfolders..."
            if self.subfolders_cb.isChecked()
            else "Scanning media files in selected folder..."
        )

        self.worker = ClassifyWorker(
            source_folder=self.source_folder,
            target_folder=self.target_folder,
            options=options,
            include_subfolders=self.subfolders_cb.isChecked(),
            rule_set=self.rule_set,
            log_to_file=self.log_to_file,
        )

        self.worker.started_processing.connect(self._on_started)
        self.worker.progress.connect(self._on_progress)
        self.worker.log_message.connect(self._on_log)
        self.worker.completed.connect(self._on_completed)
        self.worker.scan_failed.connect(self._on_scan_failed)

        self.worker.start()

    def _toggle_pause(self) -> None:
        self._paused = not self._paused
        if self._paused:
            self.worker.pause()
            self.status_label.setText("Operation paused")
        else:
            self.worker.resume()
            self.status_label.setText("Resuming operation...")
        self._update_start_button(processing=True)

    @Slot()
    def _cancel_processing(self) -> None:
        if self.worker is not None:
            self.worker.request_stop()
            self.status_label.setText("Operation cancelled")

    @Slot(int)
    def _on_started(self, total_files: int) -> None:
        self.status_label.setText(f"Starting to process {total_files} files...")

    @Slot(int, int, str)
    def _on_progress(self, current: int, total: int, eta: str) -> None:
        self.progress_bar.setValue(int(current / total * 100) if total else 0)
        self.status_label.setText(f"Processing... ({current}/{total}) {eta}")

    @Slot(str, str)
    def _on_log(self, message: str, level: str) -> None:
        self.log_viewer.log(message, level)

    @Slot(str)
    def _on_scan_failed(self, message: str) -> None:
        self._toggle_controls(processing=False)
        self.status_label.setText("")
        QMessageBox.critical(
            self,
            "Organization Failed",
            f"An error occurred during organization: {message}",
        )

    @Slot(object)
    def _on_completed(self, summary: ClassificationSummary) -> None:
        self._toggle_controls(processing=False)
        self.progress_bar.setValue(100)
        self.status_label.setText("Organization complete!")

        if summary.total_files == 0:
            QMessageBox.information(
                self,
                "No Media Files Found",
                "No supported image or video files were found in the selected "
                "folder.\n\nSupported formats: JPEG, PNG, HEIF, MOV, MP4, etc.",
            )
            return

        self._show_completion(summary)

    def _show_completion(self, summary: ClassificationSummary) -> None:
        """Completion dialog; a run with no successes is reported as inconclusive."""
        if summary.successful_files > 0:
            verb = {
                ClassificationMode.COPY: "copied",
                ClassificationMode.MOVE: "moved",
            }.get(self._mode, "previewed")
            QMessageBox.information(
                self,
                "Organization Complete!",
                f"Total processed: {summary.total_files} files\n"
                f"Successfully organized: {summary.successful_files} files\n"
                f"Failed: {summary.failed_files} files\n\n"
                f"Processing time: {summary.duration:.1f} seconds\n\n"
                f"Files have been {verb} to appropriate subfolders by aspect ratio!",
            )
            self.log_viewer.log("Processing complete!", "success")
        else:
            QMessageBox.warning(
                self,
                "Organization Issues",
                f"Total scanned: {summary.total_files} files\n"
                f"Successfully organized: {summary.successful_files} files\n"
                f"Processing failed: {summary.failed_files} files\n\n"
                "Possible causes:\n"
                "• Insufficient file permissions\n"
                "• Unable to create target folders\n"
                "• Files are being used by other applications\n\n"
                "Suggestion: Try selecting a different folder or check file permissions",
            )


__all__ = ["MainWindow"]
