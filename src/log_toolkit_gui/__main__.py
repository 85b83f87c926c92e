from log_toolkit_gui.app import run

run()
