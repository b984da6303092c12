"""
Corrige les attributs onclick générés dans index.html.

JSON.stringify(acc.id) produit "uuid" avec des guillemets doubles, ce qui casse l'attribut
onclick="..." du bouton. On remplace par acc.id entouré de quotes simples échappées.

Usage:
    python -m checkout_api.tools.fix_onclick [chemin/vers/index.html]
"""
import logging
import sys
from pathlib import Path
from typing import Tuple

logger = logging.getLogger(__name__)

PATCHED_HANDLERS = ("updateSheinAccount", "deleteSheinAccount")

def _broken(handler: str) -> str:
    return "'<button onclick=\"window." + handler + "(' + JSON.stringify(acc.id) + ')\""

def _fixed(handler: str) -> str:
    return "'<button onclick=\"window." + handler + "(\\'' + acc.id + '\\')\""

def patch_onclick_attributes(html: str) -> Tuple[str, int]:
    """
    Remplace la première occurrence cassée de chaque handler.
    Retour: (html corrigé, nombre de remplacements effectués). Idempotent.
    """
    patched = 0
    for handler in PATCHED_HANDLERS:
        broken = _broken(handler)
        if broken in html:
            html = html.replace(broken, _fixed(handler), 1)
            patched += 1
    return html, patched

def patch_file(path: Path) -> int:
    html = path.read_text(encoding="utf-8")
    html, patched = patch_onclick_attributes(html)
    path.write_text(html, encoding="utf-8")
    return patched

def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else argv
    path = Path(args[0]) if args else Path("index.html")
    if not path.is_file():
        print(f"Fichier introuvable: {path}", file=sys.stderr)
        return 1
    patched = patch_file(path)
    logger.info("fix_onclick patched=%s file=%s", patched, path)
    print(f"Done. Patched onclick attributes ({patched}).")
    return 0

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(main())
