"""Pure domain logic shared by the API and the client controllers."""
