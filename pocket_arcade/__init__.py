"""
Headless models for a small collection of arcade widgets.

The lane runner lives in :mod:`pocket_arcade.engine`; the smaller widgets
(snake, countdown, calculator, rock-paper-scissors, password generator) live
in :mod:`pocket_arcade.widgets`. Rendering and DOM wiring are left to callers.
"""
