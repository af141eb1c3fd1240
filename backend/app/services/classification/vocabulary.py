"""
Closed category vocabulary and keyword table.

``CATEGORIES`` is shared by the AI prompt, the keyword fallback and the
content normalizer. ``CATEGORY_KEYWORDS`` is matched by substring against
lower-cased text, so its declaration order decides ties and very short
keywords are avoided (they match inside unrelated words).
"""

UNCATEGORIZED: str = "Uncategorized"

CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Fitness": (
        "workout", "gym", "exercise", "fitness", "muscle", "cardio", "yoga",
        "bodybuilding", "stretching", "weight loss", "strength training",
        "hiit", "crossfit", "squat", "push up", "pull up", "plank", "deadlift",
        "leg day", "beginner", "reps",
    ),
    "Coding": (
        "code", "coding", "programming", "developer", "javascript", "python",
        "react", "github", "software", "algorithm", "frontend", "backend",
        "devops", "debug", "html", "typescript", "golang", "nextjs", "kotlin",
        "docker", "kubernetes", "open source", "terminal", "compiler",
        "public class", "static void",
    ),
    "Cooking": (
        "recipe", "cook", "cooking", "bake", "baking", "bread", "oven",
        "dough", "ingredient", "homemade", "kitchen", "sourdough", "marinade",
        "simmer",
    ),
    "Food": (
        "food", "foodie", "restaurant", "meal", "pasta", "delicious", "dinner",
        "lunch", "breakfast", "snack", "pizza", "burger", "street food",
        "cuisine", "dessert", "smoothie", "coffee", "cafe", "brunch",
    ),
    "Travel": (
        "travel", "destination", "flight", "hotel", "adventure", "tourism",
        "beach", "mountain", "vacation", "hiking", "road trip", "wanderlust",
        "itinerary", "passport", "backpacking", "hostel", "resort",
        "sightseeing", "landmark",
    ),
    "Design": (
        "design", "ui design", "ux design", "user interface", "figma",
        "typography", "layout", "graphic", "branding", "logo", "illustration",
        "wireframe", "prototype", "color palette", "design system", "mockup",
    ),
    "Photography": (
        "photography", "photographer", "photo", "camera", "lens", "portrait",
        "lightroom", "aperture", "shutter", "golden hour", "landscape shot",
    ),
    "Music": (
        "music", "song", "album", "playlist", "concert", "rapper", "singer",
        "guitar", "lyrics", "melody", "spotify", "hip hop", "jazz", "producer",
        "piano", "vocals", "mixtape",
    ),
    "Fashion": (
        "fashion", "outfit", "ootd", "clothing", "streetwear", "dress",
        "sneakers", "luxury", "accessories", "wardrobe", "lookbook", "couture",
        "styling",
    ),
    "Education": (
        "learn", "study", "course", "tutorial", "guide", "how to", "lesson",
        "teach", "knowledge", "university", "student", "lecture",
        "certification", "bootcamp", "explained", "exam",
    ),
    "Business": (
        "startup", "business", "entrepreneur", "marketing", "revenue",
        "sales", "linkedin", "saas", "founder", "e-commerce", "shopify",
        "freelance", "side hustle", "leadership",
    ),
    "Finance": (
        "finance", "money", "invest", "stock", "crypto", "bitcoin", "budget",
        "savings", "passive income", "dividend", "portfolio", "tax", "mortgage",
    ),
    "Gaming": (
        "gaming", "gamer", "video game", "playstation", "xbox", "nintendo",
        "esports", "minecraft", "fortnite", "speedrun", "steam deck",
    ),
    "Entertainment": (
        "movie", "film", "netflix", "anime", "meme", "funny", "comedy",
        "celebrity", "drama", "series", "trailer", "reaction", "prank",
        "episode",
    ),
    "Science": (
        "science", "research", "physics", "biology", "chemistry", "space",
        "nasa", "experiment", "discovery", "artificial intelligence",
        "machine learning", "neuroscience", "climate", "quantum", "rocket",
        "evolution", "mathematics",
    ),
    "Health": (
        "health", "mental health", "nutrition", "sleep", "doctor", "medical",
        "wellness", "anxiety", "therapy", "immune", "vitamin", "skincare",
    ),
    "Motivation": (
        "motivation", "motivational", "mindset", "inspiration", "discipline",
        "success", "never give up", "self improvement", "confidence", "goals",
    ),
    "Productivity": (
        "productivity", "productive", "time management", "morning routine",
        "focus", "habit", "notion", "to-do", "workflow", "deep work",
    ),
    "Lifestyle": (
        "lifestyle", "daily vlog", "minimalism", "home decor", "relationship",
        "journaling", "self care", "family", "apartment", "day in my life",
    ),
    "News": (
        "news", "breaking", "headline", "election", "politics", "government",
        "president", "economy", "announced", "report",
    ),
}

CATEGORIES: tuple[str, ...] = tuple(CATEGORY_KEYWORDS)

# Engagement-bait tags that say nothing about the content
NOISE_TAGS: frozenset[str] = frozenset(
    {
        "instagram",
        "reel",
        "reels",
        "instagood",
        "viral",
        "fyp",
        "foryou",
        "foryoupage",
        "trending",
        "explorepage",
        "explore",
        "follow",
        "like",
        "love",
        "share",
    }
)


def is_known_category(category: str | None) -> bool:
    """True for one of the twenty canonical categories (not ``Uncategorized``)."""
    return category in CATEGORY_KEYWORDS
