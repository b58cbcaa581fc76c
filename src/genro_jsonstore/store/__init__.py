# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Store package - document storage and change notification.

The package is organized into:
- core: DocumentStore, owner of the live document and its raw mutations
- subscription: ChangeNotifier, listener registry scoped by path prefix

Example:
    >>> from genro_jsonstore.store import DocumentStore
    >>> store = DocumentStore({'config': {}})
    >>> store.raw_set('config.name', 'MyApp')
    Change(add, 'config.name', old=<missing>, new='MyApp')
    >>> store.get('config.name')
    'MyApp'
"""

from .core import DocumentStore
from .subscription import ChangeNotifier, prefix_matches

__all__ = ["DocumentStore", "ChangeNotifier", "prefix_matches"]
