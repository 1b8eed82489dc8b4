"""Decorator-based table of the commands agog dispatches on.

Each entry maps a command name to its handler and docstring, which `help`
uses as the one-line summary.
"""

import inspect


class CLITools:
    def __init__(self):
        self.tools = {}

    def tool(self, func):
        tool_name = func.__name__
        tool_docstring = inspect.getdoc(func)
        self.tools[tool_name] = {
            "name": tool_name,
            "docstring": tool_docstring,
            "invoke": func,
        }
        return func

    def get(self, name):
        return self.tools.get(name)
