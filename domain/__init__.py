"""Describes the Forkify domain. Centres around the `StateStore`.

What has to hold?

- One active recipe at a time. Loading another replaces it, never merges.
- Scaling servings keeps every quantity proportional to the servings.
- The active recipe is flagged bookmarked exactly when its id is bookmarked.
- The whole bookmark collection is written out after every change.

The catalog sits behind `Gateway` and the durable bookmark entry behind
`BookmarkRepository`, so both can be faked.
"""
