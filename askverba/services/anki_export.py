"""Export vocabulary as Anki import files (CSV or tab-separated text)."""
import csv
import io
import unicodedata

FORMATS = ('csv', 'txt')
CARD_TYPES = ('basic', 'basic-reverse', 'cloze')

DEFAULT_DECK_NAME = 'AskVerba Vocabulary'
MAX_DECK_NAME_LENGTH = 100


def clean_deck_name(name):
    """Single-line deck name. Control characters (newlines, tabs) become spaces."""
    if not name:
        return DEFAULT_DECK_NAME
    name = ''.join(' ' if unicodedata.category(c).startswith('C') else c for c in name)
    name = ' '.join(name.split())[:MAX_DECK_NAME_LENGTH].strip()
    return name or DEFAULT_DECK_NAME


class AnkiExportOptions:
    """Options for an export. Defaults match the export dialog."""

    def __init__(self, format='csv', card_type='basic', include_definition=True,
                 include_example=True, include_pronunciation=False, include_tags=True,
                 deck_name=DEFAULT_DECK_NAME):
        self.format = format
        self.card_type = card_type
        self.include_definition = include_definition
        self.include_example = include_example
        self.include_pronunciation = include_pronunciation
        self.include_tags = include_tags
        self.deck_name = clean_deck_name(deck_name)


def convert_to_cards(vocabulary_items, options):
    """Build front/back card dicts from Vocabulary rows."""
    cards = []
    for index, vocab in enumerate(vocabulary_items):
        tags = []
        if vocab.difficulty:
            tags.append(vocab.difficulty)
        if vocab.status:
            tags.append(vocab.status)
        if options.include_tags and vocab.tags:
            tags.extend(tag for tag in vocab.tags if tag)
        if vocab.source_language:
            tags.append(vocab.source_language.lower())
        if vocab.target_language:
            tags.append(vocab.target_language.lower())

        front = vocab.word
        back = vocab.translation
        example = vocab.context or ''

        if options.include_pronunciation and vocab.pronunciation:
            front += f" [{vocab.pronunciation}]"
        if options.include_definition and vocab.definition:
            back += f"<br><br><b>Definition:</b> {vocab.definition}"
        if options.include_example and example:
            back += f"<br><br><b>Example:</b> <i>{example}</i>"

        cards.append({
            'front': front,
            'back': back,
            'definition': vocab.definition or '',
            'example': example,
            'pronunciation': vocab.pronunciation or '',
            'tags': ' '.join(tag.replace(' ', '_') for tag in tags),
            'guid': f"askverba-{vocab.id}-{index}",
        })
    return cards


def _optional_columns(options):
    columns = []
    if options.include_definition:
        columns.append(('Definition', 'definition'))
    if options.include_example:
        columns.append(('Example', 'example'))
    if options.include_pronunciation:
        columns.append(('Pronunciation', 'pronunciation'))
    if options.include_tags:
        columns.append(('Tags', 'tags'))
    return columns


def generate_csv(vocabulary_items, options) -> str:
    cards = convert_to_cards(vocabulary_items, options)
    optional = _optional_columns(options)

    if options.card_type == 'basic-reverse':
        headers = ['Front', 'Back', 'Reverse']
    elif options.card_type == 'cloze':
        headers = ['Text', 'Extra']
    else:
        headers = ['Front', 'Back']
    headers += [label for label, _ in optional]

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerow(headers)

    for card in cards:
        if options.card_type == 'basic-reverse':
            row = [card['front'], card['back'], card['back']]
        elif options.card_type == 'cloze':
            row = [f"{{{{c1::{card['front']}}}}} means {card['back']}", '']
        else:
            row = [card['front'], card['back']]
        row += [card[key] for _, key in optional]
        writer.writerow(row)

    return buffer.getvalue()


def generate_txt(vocabulary_items, options) -> str:
    """Tab-separated lines. Empty optional fields are left out."""
    cards = convert_to_cards(vocabulary_items, options)
    lines = ["#separator:tab", f"#deck:{clean_deck_name(options.deck_name)}"]

    for card in cards:
        fields = [card['front'], card['back']]
        for _, key in _optional_columns(options):
            if card[key]:
                fields.append(card[key])
        lines.append('\t'.join(field.replace('\t', ' ') for field in fields))

    return '\n'.join(lines)


def export_vocabulary(vocabulary_items, options):
    """Return (content, mimetype, filename) for the export."""
    safe_name = ''.join(c if c.isascii() and c.isalnum() else '_' for c in options.deck_name).strip('_') or 'vocabulary'
    if options.format == 'txt':
        return generate_txt(vocabulary_items, options), 'text/plain', f"{safe_name}.txt"
    return generate_csv(vocabulary_items, options), 'text/csv', f"{safe_name}.csv"
