"""
Main entry point for the Image Filter application.
"""
import tkinter as tk
from image_filter.gui import ImageFilterApp

def main():
    """Launch the main application window."""
    root = tk.Tk()
    app = ImageFilterApp(root)
    root.mainloop()

if __name__ == "__main__":
    main()
