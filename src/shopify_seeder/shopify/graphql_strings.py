"""Canonical GraphQL query/mutation strings for Shopify Admin API."""

QUERY_PUBLICATIONS = """
query getPublications {
  publications(first: 10) {
    edges {
      node {
        id
        name
      }
    }
  }
}
"""

MUTATION_PRODUCT_CREATE_MEDIA = """
mutation productCreateMedia($productId: ID!, $media: [CreateMediaInput!]!) {
  productCreateMedia(productId: $productId, media: $media) {
    media {
      id
      ... on MediaImage {
        image {
          url
        }
      }
    }
    mediaUserErrors {
      field
      message
    }
  }
}
"""

# Selection set shared by every aliased productCreate in a batch document
PRODUCT_CREATE_SELECTION = """
    product { id title handle }
    userErrors { field message }
"""
