"""
Services module for the Social Saver backend.

- platform_detector: URL to platform mapping
- meta_scraper: Open Graph / Twitter card scraping with bot user agents
- media_resolver: direct video URL resolution through yt-dlp
- extractors: per-platform content extraction strategies
- classification: LangChain provider chain with keyword fallback
- content_normalizer: final title and category decisions
- bookmark_pipeline: URL in, bookmark draft out
- bookmark_service: MongoDB bookmark and user storage
- whatsapp_service: Twilio WhatsApp replies
"""
