import sys
from pathlib import Path

from setuptools import find_packages, setup

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore


def get_project_version(default: str = "0.0.0") -> str:
    pyproject = Path(__file__).resolve().parent / "pyproject.toml"
    if not pyproject.exists():
        return default
    try:
        with pyproject.open("rb") as fp:
            data = tomllib.load(fp)
        return data["project"]["version"]
    except Exception:
        return default


# --- Application Configuration (Single Source of Truth) ---
APP_NAME = "PixOrder"
APP_SCRIPT = "src/pixorder_app/main.py"
APP_VERSION = get_project_version()
BUNDLE_ID = "com.pixorder.app"
AUTHOR_NAME = "PixOrder"

# --- Info.plist Configuration ---
PLIST = {
    "CFBundleName": APP_NAME,
    "CFBundleDisplayName": APP_NAME,
    "CFBundleVersion": APP_VERSION,
    "CFBundleShortVersionString": APP_VERSION,
    "CFBundleIdentifier": BUNDLE_ID,
    "LSMinimumSystemVersion": "12.0",
    "NSHumanReadableCopyright": f"Copyright © 2025 {AUTHOR_NAME}. All rights reserved.",
    "LSRequiresNativeExecution": True,
    "LSApplicationCategoryType": "public.app-category.photography",
}

# --- py2app Options ---
OPTIONS = {
    "packages": ["PySide6", "PIL", "pixorder_app"],
    "plist": PLIST,
    "bdist_base": "build/temp",
    "dist_dir": "build/dist",
    "strip": True,
    "argv_emulation": False,
    "includes": [
        "shiboken6",
        "PySide6.QtCore",
        "PySide6.QtGui",
        "PySide6.QtWidgets",
    ],
    "excludes": [
        "tkinter",
        "PyInstaller",
        "numpy",
        "pandas",
        "IPython",
        "pytest",
        "test",
        "unittest",
        "PySide6.QtWebEngine",
        "PySide6.QtWebEngineCore",
        "PySide6.QtWebEngineWidgets",
        "PySide6.Qt3DCore",
        "PySide6.Qt3DRender",
        "PySide6.QtCharts",
        "PySide6.QtDataVisualization",
        "PySide6.QtMultimedia",
        "PySide6.QtMultimediaWidgets",
        "PySide6.QtQuick",
        "PySide6.QtQuick3D",
        "PySide6.QtQml",
        "PySide6.QtPdf",
        "PySide6.QtSql",
        "PySide6.QtBluetooth",
        "PySide6.QtPositioning",
        "PySide6.QtWebChannel",
        "PySide6.QtWebSockets",
    ],
}

# Bundle options only apply to `python setup.py py2app` (macOS)
APP_KWARGS = {}
if "py2app" in sys.argv:
    APP_KWARGS = {
        "app": [APP_SCRIPT],
        "options": {"py2app": OPTIONS},
        "setup_requires": ["py2app"],
    }

# --- Setup Definition ---
setup(
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    **APP_KWARGS,
)
