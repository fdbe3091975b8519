"""
The CONTROLLER layer maps schedule data to pixels and handles user input.
scales and render are pure Python/NumPy; interaction needs PySide6.
"""
