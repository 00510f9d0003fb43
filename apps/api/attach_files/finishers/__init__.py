"""Form finishers executed after a submission has been accepted."""
