"""GraphQL query and mutation constants for GitHub Projects."""

PROJECT_FIELDS = """
query($projectId: ID!) {
  node(id: $projectId) {
    ... on ProjectV2 {
      fields(first: 50) {
        nodes {
          ... on ProjectV2SingleSelectField { id name options { id name } }
          ... on ProjectV2Field { id name dataType }
        }
      }
    }
  }
}
"""

ISSUE_PROJECT_ITEMS = """
query($issueNodeId: ID!) {
  issue: node(id: $issueNodeId) {
    ... on Issue {
      id
      number
      projectItems(first: 20) {
        nodes { id project { id } }
      }
    }
  }
}
"""

PR_PROJECT_ITEMS_PAGINATED = """
query($prNodeId: ID!, $cursor: String) {
  pullRequest: node(id: $prNodeId) {
    ... on PullRequest {
      id
      number
      title
      projectItems(first: 100, after: $cursor) {
        pageInfo { hasNextPage endCursor }
        nodes { id project { id } }
      }
    }
  }
}
"""

ADD_TO_PROJECT = """
mutation($projectId: ID!, $contentId: ID!) {
  addProjectV2ItemById(input: {projectId: $projectId, contentId: $contentId}) {
    item { id }
  }
}
"""

UPDATE_PROJECT_FIELD = """
mutation($projectId: ID!, $itemId: ID!, $fieldId: ID!, $optionId: String!) {
  updateProjectV2ItemFieldValue(input: {
    projectId: $projectId,
    itemId: $itemId,
    fieldId: $fieldId,
    value: { singleSelectOptionId: $optionId }
  }) {
    projectV2Item { id }
  }
}
"""

UPDATE_PROJECT_DATE_FIELD = """
mutation($projectId: ID!, $itemId: ID!, $fieldId: ID!, $dateValue: Date!) {
  updateProjectV2ItemFieldValue(input: {
    projectId: $projectId,
    itemId: $itemId,
    fieldId: $fieldId,
    value: { date: $dateValue }
  }) {
    projectV2Item { id }
  }
}
"""

REMOVE_FROM_PROJECT = """
mutation($projectId: ID!, $itemId: ID!) {
  deleteProjectV2Item(input: {projectId: $projectId, itemId: $itemId}) {
    deletedItemId
  }
}
"""
