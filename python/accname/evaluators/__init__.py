# SPDX-License-Identifier: AGPL-3.0-only
"""Per-category evaluators.

Every evaluator takes an element and returns an
:class:`~accname.types.EvaluationResult`; the tabindex evaluator returns
``None`` for elements it leaves to other categories.
"""
from .buttons import evaluate_button
from .embedded import evaluate_iframe, evaluate_media
from .focusable import evaluate_tabindex_element
from .forms import evaluate_fieldset, evaluate_form, evaluate_form_control, evaluate_radio_button, evaluate_select
from .images import evaluate_area, evaluate_image, evaluate_image_input, evaluate_role_img, evaluate_svg_image
from .landmarks import evaluate_landmark
from .links import evaluate_link
from .ranges import evaluate_meter, evaluate_progress
from .widgets import evaluate_aria_widget, evaluate_dialog

__all__ = [
    "evaluate_area",
    "evaluate_aria_widget",
    "evaluate_button",
    "evaluate_dialog",
    "evaluate_fieldset",
    "evaluate_form",
    "evaluate_form_control",
    "evaluate_iframe",
    "evaluate_image",
    "evaluate_image_input",
    "evaluate_landmark",
    "evaluate_link",
    "evaluate_media",
    "evaluate_meter",
    "evaluate_progress",
    "evaluate_radio_button",
    "evaluate_role_img",
    "evaluate_select",
    "evaluate_svg_image",
    "evaluate_tabindex_element",
]
