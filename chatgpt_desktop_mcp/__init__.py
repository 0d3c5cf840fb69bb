"""
ChatGPT desktop MCP bridge.

Exposes the ``chatgpt`` tool over MCP stdio and answers it by driving the
ChatGPT desktop app through the clipboard and simulated keystrokes.
"""
