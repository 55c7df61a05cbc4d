"""
Tkinter GUI for the image filter application.
"""
import tkinter as tk
from tkinter import ttk, messagebox
import logging
from typing import Optional, List
from PIL import Image, ImageTk
from datetime import datetime

from image_filter.config import (
    INPUT_FILENAME,
    OUTPUT_FILENAME,
    WINDOW_TITLE,
    WINDOW_GEOMETRY,
    LOG_FORMAT,
)
from image_filter.dispatch import FilterSession, FilterSelection, FILTER_OPTIONS
from image_filter.errors import ImageFilterError, ImageLoadError, ImageSaveError
from image_filter.image_data import ImageData
from image_filter.io_utils import get_image_info

logger = logging.getLogger(__name__)


class ImageFilterApp:
    """Main window: image view, filter dropdown and save button."""

    def __init__(self, root: tk.Tk, session: Optional[FilterSession] = None,
                 input_path: str = INPUT_FILENAME, output_path: str = OUTPUT_FILENAME):
        self.root = root
        self.root.title(WINDOW_TITLE)
        self.root.geometry(WINDOW_GEOMETRY)

        self.session = session if session is not None else FilterSession()
        self.input_path = input_path
        self.output_path = output_path

        self.setup_logging()
        self.create_widgets()
        self.load_image_automatically()

    def setup_logging(self):
        """Setup logging to text widget."""
        self.log_messages: List[str] = []
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    def log(self, message: str):
        """Add message to log."""
        timestamp = datetime.now().strftime("%H:%M:%S")
        log_entry = f"[{timestamp}] {message}"
        self.log_messages.append(log_entry)
        if hasattr(self, 'log_text'):
            self.log_text.insert(tk.END, log_entry + "\n")
            self.log_text.see(tk.END)
        logger.info(message)

    def create_widgets(self):
        """Create and arrange all GUI widgets."""
        main_frame = ttk.Frame(self.root, padding="10")
        main_frame.grid(row=0, column=0, sticky=(tk.W, tk.E, tk.N, tk.S))

        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)
        main_frame.columnconfigure(0, weight=1)
        main_frame.rowconfigure(0, weight=1)

        # Image display
        self.image_canvas = tk.Canvas(main_frame, bg='white')
        self.image_canvas.grid(row=0, column=0, sticky=(tk.N, tk.S, tk.E, tk.W))
        self.image_canvas.bind("<Configure>", lambda e: self.refresh_display())

        control_frame = ttk.Frame(main_frame, padding="5")
        control_frame.grid(row=1, column=0, pady=(10, 0))
        self.create_control_panel(control_frame)

        log_frame = ttk.LabelFrame(main_frame, text="Log", padding="5")
        log_frame.grid(row=2, column=0, sticky=(tk.W, tk.E), pady=(10, 0))
        self.create_log_panel(log_frame)

    def create_control_panel(self, parent: ttk.Frame):
        """Filter dropdown, save button and status line."""
        ttk.Label(parent, text="Select Filter:").grid(row=0, column=0, sticky=tk.W)

        self.filter_var = tk.StringVar(value=FilterSelection.ORIGINAL.value)
        self.filter_combo = ttk.Combobox(parent, textvariable=self.filter_var,
                                         values=FILTER_OPTIONS, state="readonly", width=20)
        self.filter_combo.grid(row=0, column=1, sticky=tk.W, padx=(5, 10))
        self.filter_combo.bind("<<ComboboxSelected>>", self.on_filter_selected)

        ttk.Button(parent, text="Save Image",
                   command=self.save_image).grid(row=0, column=2, sticky=tk.W)

        self.status_var = tk.StringVar(value="Ready")
        ttk.Label(parent, textvariable=self.status_var).grid(row=1, column=0, columnspan=3,
                                                             sticky=tk.W, pady=(5, 0))

    def create_log_panel(self, parent: ttk.Frame):
        """Create the logging panel."""
        self.log_text = tk.Text(parent, height=6, wrap=tk.WORD)
        scrollbar = ttk.Scrollbar(parent, orient=tk.VERTICAL, command=self.log_text.yview)
        self.log_text.configure(yscrollcommand=scrollbar.set)

        self.log_text.grid(row=0, column=0, sticky=(tk.W, tk.E, tk.N, tk.S))
        scrollbar.grid(row=0, column=1, sticky=(tk.N, tk.S))

        parent.columnconfigure(0, weight=1)
        parent.rowconfigure(0, weight=1)

    def load_image_automatically(self):
        """Load the fixed input file once at startup."""
        self.status_var.set("Loading image...")
        self.log(f"Loading image: {self.input_path}")

        try:
            image = self.session.load(self.input_path)
        except ImageLoadError as e:
            error_msg = f"Error loading image: {str(e)}"
            self.log(error_msg)
            self.status_var.set("No image loaded")
            self.image_canvas.delete("all")
            messagebox.showerror("Error", error_msg)
            return

        self.log(f"Image info: {get_image_info(image)}")
        self.filter_var.set(FilterSelection.ORIGINAL.value)
        self.display_image(image)
        self.status_var.set("Ready")

    def on_filter_selected(self, event: Optional[tk.Event] = None):
        self.apply_filter(self.filter_var.get())

    def apply_filter(self, filter_name: str):
        """Run the selected filter and show the result."""
        self.status_var.set(f"Applying {filter_name}...")
        self.root.update_idletasks()

        try:
            result = self.session.apply(filter_name)
        except ImageFilterError as e:
            self.log(f"Filter error: {str(e)}")
            self.status_var.set("Ready")
            messagebox.showerror("Error", str(e))
            return

        self.log(f"{filter_name}: {get_image_info(result)}")
        self.display_image(result)
        self.status_var.set("Ready")

    def save_image(self):
        """Write the processed image to the fixed output file."""
        try:
            output_path = self.session.save(self.output_path)
        except ImageSaveError as e:
            error_msg = f"Error saving image: {str(e)}"
            self.log(error_msg)
            messagebox.showerror("Error", error_msg)
            return
        except ImageFilterError as e:
            self.log(f"Save skipped: {str(e)}")
            messagebox.showerror("Error", str(e))
            return

        self.log(f"Image saved as {output_path}")
        messagebox.showinfo("Success", f"Image saved as {output_path}")

    def refresh_display(self):
        if self.session.processed_image is not None:
            self.display_image(self.session.processed_image)

    def display_image(self, image: ImageData):
        """Show an image centered on the canvas, shrunk to fit."""
        if image is None:
            return

        pil_image = image.to_pil()

        # Resize to fit canvas (for on-screen display only; processing stays full resolution)
        canvas = self.image_canvas
        canvas.update_idletasks()
        canvas_width = canvas.winfo_width()
        canvas_height = canvas.winfo_height()

        if canvas_width > 1 and canvas_height > 1:
            pil_image.thumbnail((canvas_width, canvas_height), Image.Resampling.LANCZOS)

        tk_image = ImageTk.PhotoImage(pil_image)
        canvas.image = tk_image  # Keep reference
        canvas.delete("all")
        canvas.create_image(canvas_width // 2, canvas_height // 2, anchor=tk.CENTER, image=tk_image)
