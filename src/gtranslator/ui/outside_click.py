"""Outside-click tracking for popover dismissal."""


class OutsideClickTracker:
    """
    The first click outside the popover arms dismissal, the second closes it.

    Clicks inside leave the armed state untouched.
    """

    def __init__(self):
        self.close_on_next_click = False

    def reset(self) -> None:
        self.close_on_next_click = False

    def register_click(self, inside: bool) -> bool:
        """Record a click; True means the popover should close now."""
        if inside:
            return False
        if self.close_on_next_click:
            self.close_on_next_click = False
            return True
        self.close_on_next_click = True
        return False
