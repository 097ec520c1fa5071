# Authentication: password hashing, tokens and routes
