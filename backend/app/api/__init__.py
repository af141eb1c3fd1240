"""
Social Saver API Package.

Package Structure:
    - v1/: Version 1 API endpoints
        - webhook.py: Twilio WhatsApp webhook and direct test submissions
        - bookmarks.py: Dashboard listing, stats, pinning and deletion
"""
