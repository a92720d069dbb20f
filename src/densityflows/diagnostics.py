"""
Diagnostic reporting for numerical edge cases.

The transformations never print directly. They call a hook with a short
message and keyword details; the default hook prints a warning line, and
tests (or a notebook) can swap in their own sink.
"""


def print_diagnostic(message, **details):
    """Default hook: print the message followed by its details."""
    if details:
        extra = ", ".join(f"{key}={value}" for key, value in details.items())
        print(f"Warning: {message} ({extra})")
    else:
        print(f"Warning: {message}")


_default_hook = print_diagnostic


def set_diagnostic_hook(hook):
    """
    Replace the process-wide default hook.

    Args:
        hook (callable or None): Called as ``hook(message, **details)``.
            ``None`` restores the printing hook.

    Returns:
        callable: The previously installed hook.
    """
    global _default_hook
    previous = _default_hook
    _default_hook = hook if hook is not None else print_diagnostic
    return previous


def get_diagnostic_hook():
    return _default_hook


def emit(message, on_diagnostic=None, **details):
    """Report through ``on_diagnostic`` if given, otherwise the default hook."""
    hook = on_diagnostic if on_diagnostic is not None else _default_hook
    hook(message, **details)


class DiagnosticCollector:
    """A hook that records every event instead of printing it."""

    def __init__(self):
        self.events = []

    def __call__(self, message, **details):
        self.events.append((message, details))

    def messages(self):
        return [message for message, _ in self.events]

    def clear(self):
        self.events.clear()

    def __len__(self):
        return len(self.events)
