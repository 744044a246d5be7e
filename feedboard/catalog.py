# Embedded feed list used when FEEDS_SOURCE=static.
# Same shape as the flat feeds.yaml document: name is the join key, theme groups feeds.
FEED_CATALOG = [
    {
        "name": "BoardGameGeek News",
        "url": "https://boardgamegeek.com/rss/blog/1",
        "theme": "Board Games",
    },
    {
        "name": "Dicebreaker",
        "url": "https://www.dicebreaker.com/feed",
        "theme": "Board Games",
    },
    {
        "name": "Shut Up & Sit Down",
        "url": "https://www.shutupandsitdown.com/feed/",
        "theme": "Board Games",
    },
    {
        "name": "The Dice Tower",
        "url": "https://www.dicetower.com/rss.xml",
        "theme": "Board Games",
    },
    {
        "name": "Polygon Tabletop",
        "url": "https://www.polygon.com/rss/tabletop-games/index.xml",
        "theme": "Tabletop RPG",
    },
    {
        "name": "EN World",
        "url": "https://www.enworld.org/ewr-porta/index.rss",
        "theme": "Tabletop RPG",
    },
    {
        "name": "Rock Paper Shotgun",
        "url": "https://www.rockpapershotgun.com/feed",
        "theme": "Video Games",
    },
]
