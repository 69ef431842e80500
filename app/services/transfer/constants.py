"""Constants for the warm transfer workflow."""

# Used when neither the request nor the call record has transcript text
NO_TRANSCRIPT_PLACEHOLDER = "No transcript provided"

# Stored on the transfer as extra.transcriptHint
TRANSCRIPT_HINT_MAX_CHARS = 200

TRANSFER_ROOM_PREFIX = "transfer"
PLACEHOLDER_AGENT_PREFIX = "agent"

# Written to summary metadata.generatedBy
WORKFLOW_ID = "transfers.initiate"

CALL_STATUS_TRANSFERRING = "transferring"
