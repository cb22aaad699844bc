"""Bundled French short words.

Random dictionary harvests are thin on two and three letter words, yet
small grids are full of short slots. Merge these into a
:class:`~minicrossword.data.dictionary.DictionaryIndex` to keep fills
feasible.
"""

from __future__ import annotations

from typing import List, Tuple

from .dictionary import DictionaryEntry

_RAW: Tuple[Tuple[str, str], ...] = (
    ("LE", "Article défini."),
    ("LA", "Article défini féminin."),
    ("DE", "Préposition marquant l'origine."),
    ("UN", "Article indéfini."),
    ("ET", "Conjonction de coordination."),
    ("OU", "Marque une alternative."),
    ("IL", "Pronom personnel masculin."),
    ("JE", "Pronom personnel première personne."),
    ("TU", "Pronom personnel deuxième personne."),
    ("ON", "Pronom indéfini."),
    ("MA", "Adjectif possessif."),
    ("TA", "Adjectif possessif."),
    ("SA", "Adjectif possessif."),
    ("ME", "Pronom personnel."),
    ("TE", "Pronom personnel."),
    ("SE", "Pronom personnel réflexif."),
    ("CE", "Démonstratif."),
    ("NE", "Particule de négation."),
    ("NI", "Négation répétée."),
    ("OR", "Métal précieux."),
    ("SI", "Exprime une condition."),
    ("AS", "Carte à jouer."),
    ("ES", "Verbe être (2e pers)."),
    ("AI", "Verbe avoir (1e pers)."),
    ("EU", "Participe passé d'avoir."),
    ("VA", "Verbe aller."),
    ("VU", "Perçu par la vue."),
    ("NU", "Sans vêtement."),
    ("PU", "Participe passé de pouvoir."),
    ("SU", "Participe passé de savoir."),
    ("LU", "Participe passé de lire."),
    ("BU", "Participe passé de boire."),
    ("MU", "Lettre grecque."),
    ("XI", "Lettre grecque."),
    ("PI", "Constante mathématique."),
    ("RO", "Lettre grecque."),
    ("AA", "Sorte de lave."),
    ("AH", "Interjection."),
    ("OH", "Interjection."),
    ("EH", "Interjection."),
    ("AY", "Commune de la Marne."),
    ("KA", "Élément spirituel égyptien."),
    ("RA", "Dieu solaire égyptien."),
    ("RE", "Note de musique."),
    ("MI", "Note de musique."),
    ("FA", "Note de musique."),
    ("SOL", "Note de musique."),
    ("DO", "Note de musique."),
    ("UT", "Note de musique (Do)."),
    ("OS", "Partie du squelette."),
    ("AN", "Année."),
    ("EN", "Préposition."),
    ("DU", "Contraction de de le."),
    ("AU", "Contraction de à le."),
    ("US", "Coutumes, usages."),
    ("GO", "Jeu de plateau asiatique."),
    ("NO", "Théâtre japonais."),
    ("IF", "Arbre conifère."),
    ("IN", "À la mode."),
    ("OM", "Syllabe sacrée sanskrite."),
    ("TIC", "Mouvement convulsif."),
    ("TAC", "Bruit sec."),
    ("TOC", "Faux bijou."),
    ("PUY", "Montagne volcanique."),
    ("PIN", "Arbre résineux."),
    ("PAN", "Morceau d'étoffe."),
    ("POT", "Récipient."),
    ("PEU", "Petite quantité."),
    ("PAS", "Mouvement de marche."),
    ("PAR", "Préposition."),
    ("PRE", "Terrain herbeux."),
    ("PRO", "Professionnel."),
    ("PUR", "Sans mélange."),
)

SHORT_WORDS: List[DictionaryEntry] = [
    DictionaryEntry(word=word, original=word.lower(), definition=definition)
    for word, definition in _RAW
]

__all__ = ["SHORT_WORDS"]
