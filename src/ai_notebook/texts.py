"""
User-facing strings (English locale).

Every message shown to a user lives here so that a different locale only needs
a different copy of this module. Templates use 'str.format' placeholders.
"""

# Initial load
LOAD_FAILED = "Could not load the sources from the configured Gist. The application will use the default sample data."
LOAD_NOT_FOUND = "No Gist found with ID '{gist_id}'. Please check the Gist ID in your configuration."
LOAD_RATE_LIMITED = "The GitHub API rate limit has been reached. Please try again later."

# Remote store
REMOTE_NOT_FOUND = "No Gist found with ID '{gist_id}'."
REMOTE_RATE_LIMITED = "The GitHub API rate limit has been reached. Please try again later."
REMOTE_NETWORK_ERROR = "A network error occurred while fetching the sources."
REMOTE_WRITE_FAILED = "Could not save the sources."
STORAGE_CONFIG_REQUIRED = "Storage configuration (Gist ID and GitHub token) is required to save the sources."

# Connection test
CONNECTION_FIELDS_REQUIRED = "Both the Gist ID and the GitHub Personal Access Token are required."
CONNECTION_NOT_FOUND = "No Gist found with ID '{gist_id}'."
CONNECTION_BAD_TOKEN = "The token is invalid or has expired."
CONNECTION_API_ERROR = "GitHub API error: {reason}"
CONNECTION_FAILED = "Connection failed: {detail}"
CONNECTION_MISSING_SCOPE = 'Connected, but the token lacks the "gist" scope required to save changes.'
CONNECTION_OK = "Connection successful! The Gist is valid and the token has write access."

# Polling
REMOTE_UPDATED_ADMIN = "The sources were updated by another administrator."
REMOTE_UPDATED_GUEST = "The sources have been updated. Your conversation has been reset."

# Save / cancel
SAVE_NO_CREDENTIAL = "Error: no storage configuration found. Please configure a GitHub token in the Settings tab."
SAVE_SUCCEEDED = "Changes saved and published to all users."
SAVE_FAILED = "An error occurred while saving changes: {detail}"
CONFIRM_DISCARD = "You have unsaved changes. Are you sure you want to discard them?"

# Credentials
CREDENTIAL_EMPTY = "The GitHub token must not be empty."
CREDENTIAL_SAVED = "Configuration saved. You can now save source changes."
CREDENTIAL_STALE = (
    "Note: your GitHub token was saved more than {days} days ago. "
    "Make sure it has not expired to avoid save errors."
)

# Session
CONFIRM_LOGOUT = "Are you sure you want to log out?"
CONFIRM_NEW_CHAT = "Are you sure you want to start a new conversation? The current chat history will be deleted."

# Answering
NO_SOURCES = "No sources have been uploaded. Please contact the administrator."
UNKNOWN_SOURCE = "Unknown source"
