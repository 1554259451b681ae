# AdGen Studio backend
