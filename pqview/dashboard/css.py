"""CSS for the pqview dashboard."""

APP_CSS = """
Screen {
    background: #000000;
    overflow: hidden;
    scrollbar-size: 0 0;
}

#frame {
    width: 100%;
    height: 100%;
    color: #cccccc;
    background: #000000;
}
"""
