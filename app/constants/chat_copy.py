class ChatCopy:
    """Fixed user-facing texts emitted by the turn pipeline."""

    WELCOME = "Hello! I'm your AI assistant. How can I help you today?"
    EMPATHY = (
        "I understand this might be frustrating. "
        "Let me do my best to help you with this issue."
    )
    IRRELEVANT = (
        "I'm designed to help with specific topics related to our services. "
        "Could you please ask a question that's more relevant to what I can "
        "assist you with?"
    )
    APOLOGY = (
        "I apologize, but I'm experiencing some technical difficulties. "
        "Please try again later."
    )
    COLLECTION_START = (
        "I'd be happy to help you with that. Could you please provide your {label}?"
    )
    COLLECTION_NEXT = "Thank you. Could you also provide your {label}?"
    COLLECTION_DONE = (
        "Thank you for providing your information. I'll use this to better "
        "assist you. How else can I help you today?"
    )
    INVALID_EMAIL = "Please enter a valid email address."
    INVALID_PHONE = "Please enter a valid phone number."
    INVALID_VALUE = "Please enter your {label}."
