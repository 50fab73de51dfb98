"""Host adapters that embed the dispatcher in a UI toolkit."""
