import random

WORDS = (
    'elephant', 'pizza', 'rainbow', 'guitar', 'butterfly', 'mountain',
    'bicycle', 'castle', 'octopus', 'sunflower', 'rocket', 'penguin',
    'hamburger', 'lighthouse', 'dinosaur', 'umbrella', 'airplane', 'flower',
    'house', 'car', 'tree', 'cat', 'dog', 'fish',
    'bird', 'sun', 'moon', 'star', 'heart', 'apple',
    'banana', 'cake', 'book', 'phone', 'computer', 'chair',
)


def random_word(rng=random) -> str:
    """Pick the secret word for a room."""
    return rng.choice(WORDS)
