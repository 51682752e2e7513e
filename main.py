import sys
from ui.main_window import GymApp

"""
Entry point for GymProDesk.
Run this file to start the application.
"""

if __name__ == "__main__":
    # Create the Application instance
    app = GymApp(sys.argv)

    # Custom start method (paths, logging, DB init, main window)
    app.start()

    # Start the event loop
    sys.exit(app.exec())
