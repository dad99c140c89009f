"""Question, feedback and summary generation for interview sessions."""
