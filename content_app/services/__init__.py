"""Operations on the content graph, called by the API views and admin."""
