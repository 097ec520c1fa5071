# Request and response models
