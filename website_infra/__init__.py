"""Static website infrastructure: S3, CloudFront, Route 53 and content publishing."""
