# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""SettingsEditor - Example of an undoable settings document.

A didactic example showing listeners scoped by path prefix, atomic
batches and undo/redo on top of JsonEngine.
"""

from __future__ import annotations

from genro_jsonstore import Change, JsonEngine


class SettingsEditor:
    """Application settings with an undoable edit history.

    Example:
        >>> editor = SettingsEditor()
        >>> editor.watch('display')
        >>> editor.engine.set('display.theme', 'dark')
        [display] add display.theme
        >>> editor.apply_preset({'display.theme': 'light', 'display.font': 14})
        [display] batch display.theme, display.font
        >>> editor.engine.undo()
        [display] batch display.font, display.theme
    """

    def __init__(self) -> None:
        self.engine = JsonEngine({'display': {}, 'network': {'proxy': None}})

    def watch(self, prefix: str) -> None:
        """Print every change related to prefix."""
        def report(change: Change) -> None:
            if change.is_batch:
                print(f"[{prefix}] batch {', '.join(change.paths)}")
            else:
                print(f"[{prefix}] {change.kind.value} {change.path}")

        self.engine.on_change(report, prefix)

    def apply_preset(self, preset: dict[str, object]) -> None:
        """Apply several settings as one undo step."""
        with self.engine.transaction():
            for path, value in preset.items():
                self.engine.set(path, value)


if __name__ == '__main__':
    editor = SettingsEditor()
    editor.watch('display')
    editor.engine.set('display.theme', 'dark')
    editor.apply_preset({'display.theme': 'light', 'display.font': 14})
    editor.engine.undo()
    editor.engine.redo()
    editor.engine.log()
