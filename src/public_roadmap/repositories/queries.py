"""GraphQL documents for the Linear API.

The issue filter is assembled per request: a filter clause is only present
when its variable is set, so unset scopes are left out of the query instead
of being sent as null.
"""

ISSUE_PAGE_SIZE = 100

_ISSUE_FIELDS = """
      nodes {
        id
        identifier
        title
        description
        state {
          name
        }
        labels {
          nodes {
            name
            color
          }
        }
        createdAt
        updatedAt
      }
"""

# variable name -> (GraphQL filter clause)
_FILTER_CLAUSES = {
    "teamId": "team: { id: { eq: $teamId } }",
    "projectId": "project: { id: { eq: $projectId } }",
    "labelName": "labels: { name: { eq: $labelName } }",
}

GET_ISSUE_COMMENTS_QUERY = """
  query GetIssueComments($issueId: String!) {
    issue(id: $issueId) {
      id
      comments {
        nodes {
          id
          body
          createdAt
          user {
            name
            email
          }
        }
      }
    }
  }
"""

ADD_COMMENT_MUTATION = """
  mutation AddComment($issueId: String!, $body: String!) {
    commentCreate(input: {
      issueId: $issueId
      body: $body
    }) {
      success
      comment {
        id
        createdAt
      }
    }
  }
"""


def build_issues_query(variables: dict[str, str]) -> str:
    """Build the issue listing query for the given filter variables.

    Args:
        variables: Filter variables that are set (teamId, projectId, labelName)

    Returns:
        GraphQL query text declaring and using only those variables

    Raises:
        ValueError: If an unknown filter variable is passed
    """
    unknown = set(variables) - set(_FILTER_CLAUSES)
    if unknown:
        raise ValueError(f"Unknown issue filter variables: {sorted(unknown)}")

    names = [name for name in _FILTER_CLAUSES if name in variables]
    declaration = ""
    if names:
        declaration = "(" + ", ".join(f"${name}: String" for name in names) + ")"

    lines = [f"query GetIssues{declaration} {{", "  issues("]
    if names:
        lines.append("    filter: {")
        lines.extend(f"      {_FILTER_CLAUSES[name]}" for name in names)
        lines.append("    }")
    lines.append(f"    first: {ISSUE_PAGE_SIZE}")
    lines.append(f"  ) {{{_ISSUE_FIELDS}  }}")
    lines.append("}")
    return "\n".join(lines)
