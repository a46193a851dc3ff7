"""Qt layer for mboxlens: worker plumbing, dialogs and the state controller."""
