"""Headless view state controllers.

Updates: v0.1.0 - 2026-10-08 - Export page controllers and the test input list.
"""

from .comparison_controller import VersionComparisonController
from .create_prompt_controller import CreatePromptController
from .prompt_detail_controller import PromptDetailController
from .prompt_list_controller import PromptListController
from .quick_test_controller import QuickTestController
from .settings_controller import SettingsController
from .test_inputs import TestInputList

__all__ = [
    "CreatePromptController",
    "PromptDetailController",
    "PromptListController",
    "QuickTestController",
    "SettingsController",
    "TestInputList",
    "VersionComparisonController",
]
