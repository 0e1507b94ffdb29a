"""Label filters, name helpers, error messages, prompts and console text formatting."""