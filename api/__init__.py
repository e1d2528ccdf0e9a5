"""Flask HTTP front end for the expense tracker."""
