"""The renderer interface and a renderer that draws nothing."""

from __future__ import annotations

import abc

__all__ = ["Renderer", "NilRenderer"]


class Renderer(abc.ABC):
    """Draws a program's view to the terminal and manages terminal modes."""

    @abc.abstractmethod
    def start(self) -> None:
        """Start the renderer."""

    @abc.abstractmethod
    def stop(self) -> None:
        """Stop the renderer, drawing the final frame in the buffer, if any."""

    @abc.abstractmethod
    def kill(self) -> None:
        """Stop the renderer without drawing a final frame."""

    @abc.abstractmethod
    def write(self, view: str) -> None:
        """Hand a frame to the renderer; it is drawn at the renderer's discretion."""

    @abc.abstractmethod
    def repaint(self) -> None:
        """Make the next render a full repaint."""

    @abc.abstractmethod
    def clear_screen(self) -> None:
        """Clear the terminal."""

    @abc.abstractmethod
    def alt_screen(self) -> bool:
        """Whether the alternate screen buffer is active."""

    @abc.abstractmethod
    def enter_alt_screen(self) -> None:
        """Enable the alternate screen buffer."""

    @abc.abstractmethod
    def exit_alt_screen(self) -> None:
        """Disable the alternate screen buffer."""

    @abc.abstractmethod
    def show_cursor(self) -> None:
        """Show the cursor."""

    @abc.abstractmethod
    def hide_cursor(self) -> None:
        """Hide the cursor."""

    @abc.abstractmethod
    def enable_mouse_cell_motion(self) -> None:
        """Enable click, release, wheel and drag mouse events."""

    @abc.abstractmethod
    def disable_mouse_cell_motion(self) -> None:
        """Disable cell motion mouse tracking."""

    @abc.abstractmethod
    def enable_mouse_all_motion(self) -> None:
        """Enable all mouse events, whether or not a button is pressed."""

    @abc.abstractmethod
    def disable_mouse_all_motion(self) -> None:
        """Disable all motion mouse tracking."""


class NilRenderer(Renderer):
    """A renderer that does nothing; output is left entirely to the program."""

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def kill(self) -> None:
        pass

    def write(self, view: str) -> None:
        pass

    def repaint(self) -> None:
        pass

    def clear_screen(self) -> None:
        pass

    def alt_screen(self) -> bool:
        return False

    def enter_alt_screen(self) -> None:
        pass

    def exit_alt_screen(self) -> None:
        pass

    def show_cursor(self) -> None:
        pass

    def hide_cursor(self) -> None:
        pass

    def enable_mouse_cell_motion(self) -> None:
        pass

    def disable_mouse_cell_motion(self) -> None:
        pass

    def enable_mouse_all_motion(self) -> None:
        pass

    def disable_mouse_all_motion(self) -> None:
        pass