"""FastAPI server for Job Fair Hub."""
