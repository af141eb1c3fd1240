"""
Social Saver Backend Application Package

Turns links shared over WhatsApp into categorized, searchable bookmarks:

- Platform-aware content extraction (Instagram, X/Twitter, YouTube, articles)
- AI classification via LangChain (Gemini, then Cohere) with a keyword fallback
- MongoDB persistence and a dashboard REST API
- Twilio WhatsApp webhook with out-of-band replies

Package Structure:
- api/: REST API endpoints organized by version (v1)
- core/: Core infrastructure (database, shared service container)
- models/: Pydantic data models
- services/: Extraction, classification, storage and messaging logic
- utils/: Logging, HTTP and title helpers
"""

__version__ = "1.0.0"
__app_name__ = "Social-Saver"
