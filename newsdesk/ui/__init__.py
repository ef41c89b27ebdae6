"""Interface graphique Tkinter."""
