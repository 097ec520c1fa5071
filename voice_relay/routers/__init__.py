# Speech synthesis relay route
