# storyhub/services/seeder.py
"""Demonstration content for an empty library.

Run once at startup (``storyhub db init --seed``) or on demand
(``storyhub db seed``). Seeding is skipped whenever any story already
exists, so it is safe to run repeatedly.
"""
import logging
from sqlalchemy import func
from sqlalchemy.orm import Session

from storyhub.sa.models import User, Story, Chapter, FeaturedAuthor

logger = logging.getLogger(__name__)

SAMPLE_AUTHOR = {
    'external_id': "demo-author-uid",
    'username': "african_storyteller",
    'email': "storyteller@demo.com",
    'display_name': "Noma Themba",
    'bio': "Traditional storyteller sharing African wisdom through tales.",
    'preferred_language': "en",
}

UBUNTU_TEXT = """\
In the valley of the singing river lived two neighboring villages: Tukelo and Kopano. Though they shared the same water source and breathed the same air, the people of these villages had forgotten how to share anything else.

Tukelo village prided itself on individual achievement. Each family kept to itself, accumulating wealth and knowledge like squirrels storing nuts for winter. "Every person for themselves," was their motto.

Kopano village wasn't much different. They too believed that success meant having more than their neighbors. Competition ran so deep that neighbors would hide their harvest techniques and refuse to help each other in times of need.

Then came the year of the great challenges. First, locusts devoured half the crops. Then, a flash flood damaged the main bridge connecting both villages to the trading post. Finally, a sickness spread that left many too weak to tend their fields.

In Tukelo, families with food refused to share with those who had none. "We worked hard for this," they said. "Let others work harder."

In Kopano, it was the same. Healthy families avoided the sick, afraid of catching the illness. Knowledge of herbal remedies was guarded jealously.

But there was one person who moved between both villages: an old woman named MaUbuntu. She had been born in Tukelo but married into Kopano, and she remembered the old ways.

One evening, as she watched children from both villages growing thin and families growing bitter, MaUbuntu stood at the river that connected their lands and began to speak:

"My children," her voice carried across the water, "do you know what your names mean? Tukelo means 'we are one' and Kopano means 'we come together.' Your ancestors chose these names for a reason."

She continued, "There is an old word: Ubuntu. It means 'I am because we are.' A person is a person through other people. When one suffers, we all suffer. When one thrives, we all have the possibility to thrive."

That night, MaUbuntu did something that shocked both villages. She took her family's entire grain reserve and placed it at the riverbank between the two villages. "This is for anyone who needs it," she announced.

At first, people were suspicious. But as days passed and they watched MaUbuntu give without expecting anything in return, something began to shift.

A young father from Tukelo, seeing his child's hunger, swallowed his pride and took some grain. In return, he quietly left his best fishing nets for others to use.

A grandmother from Kopano, moved by this gesture, brought her special herb mixture that could treat the sickness. Soon, a small pile of shared resources grew at the riverbank.

Slowly, tentatively, people began to help each other. Tukelo's skilled farmers taught Kopano's people new planting techniques. Kopano's herbal healers shared their knowledge with Tukelo. Children from both villages played together while their parents worked side by side to rebuild the bridge.

The transformation was remarkable. Not only did both villages recover from their hardships, but they thrived like never before. The combined knowledge, resources, and labor created abundance that neither village could have achieved alone.

Years later, the two villages officially became one, taking the name Ubuntu Village. At its center stood a statue of MaUbuntu with an inscription: "I am because we are."

Visitors would often ask the villagers the secret of their prosperity. The answer was always the same: "We learned that when we lift each other up, we all rise higher. When we share our light, the whole world becomes brighter."

And indeed, Ubuntu Village became known throughout the region as a place where no one went hungry, no child lacked education, and no elder was forgotten. They had rediscovered an ancient truth: that humanity's greatest strength lies not in individual achievement, but in our connection to one another.

The river still sings as it flows through the village, and if you listen carefully, it seems to whisper the eternal wisdom: "Ubuntu – I am because we are.\""""

SAMPLE_STORIES = [
    {
        'title': "A Christmas Carol",
        'description': "Charles Dickens' timeless tale of Ebenezer Scrooge's transformation from a miserly old man "
                       "to a generous soul, guided by three spirits on Christmas Eve.",
        'content': "A Christmas Carol summary - This beloved classic follows the journey of Ebenezer Scrooge as he "
                   "learns the true meaning of Christmas through supernatural visitations.",
        'genre': "Classic",
        'read_count': 1245,
        'like_count': 389,
        'chapters': [
            ("Marley's Ghost",
             "Scrooge encounters the ghost of his former business partner Jacob Marley, who warns him of three "
             "spirits that will visit him."),
            ("The First of the Three Spirits",
             "The Ghost of Christmas Past shows Scrooge scenes from his younger days, revealing how he became "
             "bitter and isolated."),
            ("The Second of the Three Spirits",
             "The Ghost of Christmas Present shows Scrooge how people are celebrating Christmas in the current "
             "year, including his nephew and the Cratchit family."),
            ("The Last of the Spirits",
             "The Ghost of Christmas Yet to Come shows Scrooge a possible future where he dies alone and unmourned."),
            ("The End of It",
             "Scrooge awakens on Christmas morning transformed, becoming generous and kind to all around him."),
        ],
    },
    {
        'title': "The Adventures of Tom Sawyer",
        'description': "Mark Twain's classic novel about a mischievous boy growing up along the Mississippi River, "
                       "filled with adventure, friendship, and coming-of-age wisdom.",
        'content': "Tom Sawyer summary - Follow the adventures of Tom Sawyer as he navigates childhood in a small "
                   "Missouri town, getting into trouble and discovering what it means to grow up.",
        'genre': "Adventure",
        'read_count': 892,
        'like_count': 267,
        'chapters': [
            ("Tom Plays, Fights, and Hides",
             "Tom Sawyer's adventures begin as he skips school, gets into fights, and hides from Aunt Polly."),
            ("The Glorious Whitewasher",
             "Tom cleverly tricks his friends into whitewashing the fence for him, making it seem like fun work."),
            ("Tom as a General",
             "Tom organizes the boys into armies and leads them in mock battles and adventures."),
            ("Mental Acrobatics",
             "Tom struggles with Sunday school lessons but finds ways to make even memorizing Bible verses "
             "into a game."),
            ("The Pinch-Bug and His Prey",
             "Tom causes a commotion in church when he brings a pinch-bug that terrorizes the congregation."),
            ("Tom Meets Becky",
             "Tom falls in love with Becky Thatcher and tries to win her attention through various schemes."),
        ],
    },
    {
        'title': "Alice's Adventures in Wonderland",
        'description': "Lewis Carroll's whimsical tale of a young girl who falls down a rabbit hole into a fantasy "
                       "world populated by peculiar creatures and nonsensical logic.",
        'content': "Alice in Wonderland summary - Join Alice as she tumbles into a magical world where nothing is "
                   "quite as it seems, meeting unforgettable characters along the way.",
        'genre': "Fantasy",
        'read_count': 756,
        'like_count': 198,
        'chapters': [
            ("Down the Rabbit-Hole",
             "Alice follows a White Rabbit down a hole and falls into a strange underground world."),
            ("The Pool of Tears",
             "Alice grows and shrinks after drinking from bottles, eventually swimming in a pool of her own tears."),
            ("A Caucus-Race and a Long Tale",
             "Alice meets various animals who participate in a peculiar race with no clear winner."),
            ("The Rabbit Sends in a Little Bill",
             "Alice grows too large for the White Rabbit's house, causing chaos and confusion."),
            ("Advice from a Caterpillar",
             "Alice encounters a hookah-smoking caterpillar who gives her cryptic advice about changing size."),
            ("Pig and Pepper",
             "Alice meets the Cheshire Cat and witnesses the Duchess's strange household with a crying baby."),
            ("A Mad Tea-Party",
             "Alice joins the Mad Hatter, March Hare, and Dormouse for a nonsensical tea party."),
        ],
    },
    {
        'title': "Ubuntu: The Village That Learned to Share",
        'description': "A heartwarming story about how the African philosophy of Ubuntu transformed a divided "
                       "community into a thriving, unified village.",
        'content': UBUNTU_TEXT,
        'genre': "Cultural",
        'read_count': 312,
        'like_count': 156,
        'chapters': [
            ("Two Divided Villages",
             "The story of Tukelo and Kopano villages, once united but now divided by pride and mistrust."),
            ("The Wisdom of MaUbuntu",
             "An elder woman named MaUbuntu teaches the ancient philosophy of Ubuntu - 'I am because we are.'"),
            ("The First Act of Sharing",
             "MaUbuntu places her family's grain at the riverbank, beginning the transformation of both "
             "communities."),
            ("Ubuntu Village is Born",
             "The villages unite as Ubuntu Village, creating prosperity through cooperation and shared wisdom."),
        ],
    },
]


def seed_sample_data(session: Session) -> bool:
    """Insert the demonstration author, stories, chapters and featured slot.

    Args:
        session: Session to write with; committed on success, rolled back on error

    Returns:
        True if data was inserted, False if the library already had stories
    """
    if (session.query(func.count(Story.id)).scalar() or 0) > 0:
        logger.info("Sample data skipped: stories already exist")
        return False

    try:
        # The author survives when only the stories were removed
        author = session.query(User).filter(User.external_id == SAMPLE_AUTHOR['external_id']).first()
        if author is None:
            author = User(**SAMPLE_AUTHOR)
            session.add(author)
            session.flush()

        for entry in SAMPLE_STORIES:
            fields = {key: value for key, value in entry.items() if key != 'chapters'}
            story = Story(
                **fields,
                language="en",
                author_id=author.id,
                is_published=True,
                is_draft=False,
                is_featured=True,
                chapter_count=len(entry['chapters']),
            )
            session.add(story)
            session.flush()

            for number, (title, content) in enumerate(entry['chapters'], start=1):
                session.add(Chapter(
                    story_id=story.id,
                    chapter_number=number,
                    title=title,
                    content=content,
                    word_count=len(content.split()),
                ))

        session.flush()
        if session.query(FeaturedAuthor).filter(FeaturedAuthor.author_id == author.id).first() is None:
            session.add(FeaturedAuthor(author_id=author.id, display_order=1))
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Failed to seed sample data")
        raise

    logger.info("Seeded %d sample stories by %s", len(SAMPLE_STORIES), author.username)
    return True
