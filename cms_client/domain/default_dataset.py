"""Bundled default dataset used to seed (and reset) the local snapshot stores.

Builders return fresh objects on every call so callers may mutate them freely.
"""

from .entities import Article, Category, User, UserRole

_SEED_CREATED = "2023-01-01T00:00:00.000Z"

_CATEGORIES: list[tuple[str, str]] = [
    ("1", "Technology"),
    ("2", "Health"),
    ("3", "Business"),
    ("4", "Sports"),
    ("5", "Entertainment"),
]

_ARTICLES: list[tuple[str, str, str, str]] = [
    (
        "1",
        "The Future of Artificial Intelligence",
        "Artificial intelligence (AI) is revolutionizing industries across the globe. "
        "From healthcare to finance, AI is transforming how we work, live, and interact with technology. "
        "Machine learning algorithms are becoming more sophisticated, enabling computers to perform "
        "tasks that once required human intelligence.",
        "1",
    ),
    (
        "2",
        "Tips for a Healthy Lifestyle",
        "Maintaining a healthy lifestyle is essential for overall well-being. "
        "Regular exercise, a balanced diet, and adequate sleep are fundamental components of good health. "
        "A nutritious diet rich in fruits, vegetables, lean proteins, and whole grains provides the "
        "necessary nutrients for optimal body function.",
        "2",
    ),
    (
        "3",
        "Cryptocurrency Market Trends",
        "The cryptocurrency market continues to evolve rapidly, with Bitcoin and Ethereum leading the way. "
        "Market volatility remains a key characteristic, with prices fluctuating dramatically in response "
        "to regulatory news. Decentralized finance (DeFi) applications are expanding, offering alternative "
        "financial services outside traditional banking systems.",
        "3",
    ),
    (
        "4",
        "Latest Innovations in Smartphone Technology",
        "Smartphone technology continues to advance at an impressive pace. "
        "Foldable displays are becoming more refined, offering users new form factors and versatility. "
        "Enhanced connectivity with 5G support enables faster data speeds and lower latency for applications.",
        "1",
    ),
    (
        "5",
        "Mental Health Awareness",
        "Mental health awareness has grown significantly in recent years, reducing stigma and promoting "
        "open conversations. Stress management techniques, including meditation, mindfulness, and regular "
        "exercise, can help maintain emotional balance.",
        "2",
    ),
    (
        "6",
        "Small Business Growth Strategies",
        "Effective growth strategies are essential for small businesses looking to expand their operations "
        "and increase profitability. Digital marketing offers cost-effective ways to reach target audiences "
        "through social media, search engine optimization, and content marketing.",
        "3",
    ),
    (
        "7",
        "World Cup Highlights",
        "The FIFA World Cup delivered thrilling moments of sporting excellence and international competition. "
        "Spectacular goals, extraordinary saves, and tactical masterpieces defined the tournament. "
        "The tournament united fans worldwide through a shared passion for soccer.",
        "4",
    ),
    (
        "8",
        "Movie Industry Trends",
        "The movie industry is experiencing significant shifts in production, distribution, and consumption. "
        "Streaming platforms have revolutionized how audiences access content, challenging traditional "
        "theatrical release models.",
        "5",
    ),
    (
        "9",
        "Cloud Computing Solutions for Business",
        "Cloud computing offers transformative solutions for businesses of all sizes. "
        "Infrastructure as a Service (IaaS) provides scalable computing resources without major capital "
        "investments. Software as a Service (SaaS) delivers applications over the internet on a subscription basis.",
        "1",
    ),
    (
        "10",
        "Nutrition Myths Debunked",
        "Many common nutrition beliefs lack scientific support despite widespread acceptance. "
        "Claims about superfoods often overstate their benefits; while nutritious, no single food provides "
        "all necessary nutrients.",
        "2",
    ),
    (
        "11",
        "Sustainable Business Practices",
        "Sustainable business practices benefit both the environment and corporate performance. "
        "Energy efficiency initiatives reduce operational costs while decreasing carbon footprints through "
        "improved building design, equipment upgrades, and renewable energy adoption.",
        "3",
    ),
    (
        "12",
        "Olympic Athletes Training Regimens",
        "Olympic athletes follow rigorous training regimens to achieve peak performance at the world's most "
        "prestigious sporting event. Psychological preparation builds mental resilience through visualization, "
        "concentration exercises, and strategies for managing competitive stress.",
        "4",
    ),
]


def default_categories() -> list[Category]:
    return [
        Category(id=cid, name=name, created_at=_SEED_CREATED, updated_at=_SEED_CREATED)
        for cid, name in _CATEGORIES
    ]


def default_articles() -> list[Article]:
    """The 12 seed articles, each carrying a snapshot of its category."""
    by_id = {category.id: category for category in default_categories()}
    articles: list[Article] = []
    for index, (aid, title, content, category_id) in enumerate(_ARTICLES, start=1):
        stamp = f"2023-02-{index:02d}T00:00:00.000Z"
        articles.append(
            Article(
                id=aid,
                title=title,
                content=content,
                category_id=category_id,
                category=by_id.get(category_id),
                created_at=stamp,
                updated_at=stamp,
            )
        )
    return articles


def demo_users() -> list[User]:
    """Accounts used by the demo login simulator, one per role."""
    return [
        User(
            id="1",
            name="John Doe",
            email="user@example.com",
            role=UserRole.USER,
            token="dummy-user-token",
        ),
        User(
            id="2",
            name="Admin User",
            email="admin@example.com",
            role=UserRole.ADMIN,
            token="dummy-admin-token",
        ),
    ]
