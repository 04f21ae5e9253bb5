"""Live editing support for beancount ledgers.

This package contains the text-editing core of a beancount editor extension:
amount alignment as you type, transaction and whole-file formatting, and fold
levels for transactions, directives and marker sections. Everything works on
plain strings; host editors adapt their buffers to ``buffer.TextBuffer``.

INCLUDED MODULES:

1. width
   - Display width of text in columns
   - Fixed two-column width for CJK, kana and hangul when configured

2. classify
   - Recognizes transaction headers, balance assertions and postings

3. amount
   - Finds the decimal point of the leading amount after an account

4. align
   - Aligns decimal points (or integer amounts) on the separator column
   - Keeps the cursor on the same character when padding is inserted

5. block
   - Formats one transaction or every posting in a ledger

6. fold
   - Fold levels from {{{ }}} markers and ledger structure
   - Per-buffer cache invalidated by the buffer revision

7. session
   - Event handlers for hosts: typed ".", new lines, save, fold queries

CONFIGURATION:
See config for the beancount_editor.yaml format. The command-line front end
(cli) formats ledgers and prints fold levels:

    beancount-editor format --check main.beancount
"""
